import logging
from typing import Optional, Tuple

from aiohttp import hdrs, web

from dynamic_compression import metrics
from dynamic_compression.compressors import get_compressor
from dynamic_compression.strategy import DynamicCompressionStrategy, \
    GZIP_DEFAULT_LEVEL, BROTLI_DEFAULT_LEVEL

logger = logging.getLogger(__name__)

# Bodies up to roughly one MTU are not worth compressing.
DEFAULT_MIN_SIZE = 1500


class DynamicCompressionHandler:
    """
    Compresses response bodies at request-serving time.

    The DynamicCompressionStrategy decides which encodings are allowed and
    their levels. When no strategy is given, gzip follows the legacy
    dynamic_gzip flag and brotli is never used.

    An encoding is applied only when:
        . It is enabled;
        . The body is bigger than min_size bytes;
        . The client lists it in the Accept-Encoding header.

    Brotli wins over gzip when both are possible.
    """

    def __init__(self, strategy: Optional[DynamicCompressionStrategy] = None,
                 dynamic_gzip=True, min_size=DEFAULT_MIN_SIZE):
        self.strategy = strategy
        self.dynamic_gzip = dynamic_gzip
        self.min_size = max(0, min_size)

    @classmethod
    def from_config(cls, config, strategy=None):
        """
        :param CompressionConfig config: Configuration to read from
        :param strategy: Strategy to use instead of the COMPRESSION section
        """
        compression_config = config['COMPRESSION']
        min_size = DEFAULT_MIN_SIZE
        if strategy is None and compression_config is not None:
            strategy = DynamicCompressionStrategy.from_config(
                compression_config
            )
        if compression_config is not None:
            min_size = compression_config.get('MIN_SIZE', DEFAULT_MIN_SIZE)
        return cls(
            strategy=strategy,
            dynamic_gzip=config['DYNAMIC_GZIP'],
            min_size=min_size,
        )

    @property
    def gzip_level(self):
        if self.strategy is None:
            return GZIP_DEFAULT_LEVEL
        return self.strategy.get_gzip_level()

    @property
    def brotli_level(self):
        if self.strategy is None:
            return BROTLI_DEFAULT_LEVEL
        return self.strategy.get_brotli_level()

    def gzip_enabled(self):
        if self.strategy is None:
            return self.dynamic_gzip
        return self.strategy.is_gzip_enabled()

    def brotli_enabled(self):
        if self.strategy is None:
            return False
        return self.strategy.is_brotli_enabled()

    def exceeds_min_size(self, body_size):
        return body_size > self.min_size

    @staticmethod
    def supports_encoding(accept_encoding, encoding):
        return encoding.lower() in (accept_encoding or "").lower()

    def choose_encoding(self, accept_encoding, body_size) -> Optional[str]:
        """
        Returns the Content-Encoding to apply, or None to send the body as is.
        """
        if not self.exceeds_min_size(body_size):
            return None
        if self.brotli_enabled() and self.supports_encoding(
                accept_encoding, "br"):
            return "br"
        if self.gzip_enabled() and self.supports_encoding(
                accept_encoding, "gzip"):
            return "gzip"
        return None

    def level_for(self, encoding):
        if encoding == "br":
            return self.brotli_level
        return self.gzip_level

    def compress_body(self, body: bytes,
                      accept_encoding) -> Tuple[bytes, Optional[str]]:
        """
        Compress the body when the configuration and the client allow it.

        :return: The (possibly compressed) body and the encoding used
        """
        encoding = self.choose_encoding(accept_encoding, len(body))
        if encoding is None:
            metrics.uncompressed_responses.inc()
            return body, None

        level = self.level_for(encoding)
        compressed = get_compressor(encoding, level).compress(body)
        logger.debug(
            f"Compressed response with {encoding} (level {level}): "
            f"{len(body)} -> {len(compressed)} bytes"
        )
        metrics.compressed_responses.labels(encoding).inc()
        if body:
            metrics.compression_ratio.labels(encoding).observe(
                len(compressed) / len(body)
            )
        return compressed, encoding

    def compress_response(self, request: web.Request,
                          response: web.StreamResponse) -> web.StreamResponse:
        """
        Replace the response body with its compressed version, setting the
        Content-Encoding and Vary headers.

        Streamed responses, non-bytes bodies and responses that already carry
        a Content-Encoding (or have aiohttp compression enabled) are returned
        untouched.
        """
        if not isinstance(response, web.Response):
            return response
        if hdrs.CONTENT_ENCODING in response.headers:
            return response
        # aiohttp encodes the body itself on prepare
        if response.compression:
            return response

        body = response.body
        if not isinstance(body, (bytes, bytearray)):
            return response

        accept_encoding = request.headers.get(hdrs.ACCEPT_ENCODING, "")
        compressed, encoding = self.compress_body(bytes(body), accept_encoding)
        if encoding is None:
            return response

        response.body = compressed
        response.headers[hdrs.CONTENT_ENCODING] = encoding
        vary = response.headers.get(hdrs.VARY)
        if vary is None:
            response.headers[hdrs.VARY] = hdrs.ACCEPT_ENCODING
        elif hdrs.ACCEPT_ENCODING.lower() not in vary.lower():
            response.headers[hdrs.VARY] = f"{vary}, {hdrs.ACCEPT_ENCODING}"
        return response
