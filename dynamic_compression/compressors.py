import gzip
from abc import ABC, abstractmethod

import brotli

from dynamic_compression.exceptions import UnsupportedEncoding
from dynamic_compression.strategy import GZIP_DEFAULT_LEVEL, \
    BROTLI_DEFAULT_LEVEL


class ResponseCompressor(ABC):
    content_encoding = None
    default_level = None

    def __init__(self, level=None):
        if level is None:
            level = self.default_level
        self.level = level

    @abstractmethod
    def compress(self, content: bytes) -> bytes:
        ...

    @abstractmethod
    def decompress(self, content: bytes) -> bytes:
        ...


class GzipCompressor(ResponseCompressor):
    content_encoding = "gzip"
    default_level = GZIP_DEFAULT_LEVEL

    def compress(self, content: bytes) -> bytes:
        return gzip.compress(content, compresslevel=self.level)

    def decompress(self, content: bytes) -> bytes:
        return gzip.decompress(content)


class BrotliCompressor(ResponseCompressor):
    content_encoding = "br"
    default_level = BROTLI_DEFAULT_LEVEL

    def compress(self, content: bytes) -> bytes:
        return brotli.compress(content, quality=self.level)

    def decompress(self, content: bytes) -> bytes:
        return brotli.decompress(content)


_compressors = {
    "gzip": GzipCompressor,
    "br": BrotliCompressor,
}


def get_compressor(content_encoding: str, level=None) -> ResponseCompressor:
    try:
        compressor_cls = _compressors[content_encoding]
    except KeyError:
        raise UnsupportedEncoding(content_encoding)
    return compressor_cls(level)


def compress(content: bytes, content_encoding: str, level=None) -> bytes:
    return get_compressor(content_encoding, level).compress(content)


def decompress(content: bytes, content_encoding: str) -> bytes:
    return get_compressor(content_encoding).decompress(content)
