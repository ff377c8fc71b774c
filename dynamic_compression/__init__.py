from .strategy import DynamicCompressionStrategy
from .handler import DynamicCompressionHandler
from .config import CompressionConfig
from .compressors import ResponseCompressor, GzipCompressor, \
    BrotliCompressor, get_compressor, compress, decompress
from .exceptions import CompressionException, UnsupportedEncoding

__all__ = [
    "DynamicCompressionStrategy", "DynamicCompressionHandler",
    "CompressionConfig", "ResponseCompressor", "GzipCompressor",
    "BrotliCompressor", "get_compressor", "compress", "decompress",
    "CompressionException", "UnsupportedEncoding"
]
