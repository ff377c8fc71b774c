class CompressionException(Exception):
    pass


class UnsupportedEncoding(CompressionException):
    def __init__(self, content_encoding):
        self.content_encoding = content_encoding
        super(UnsupportedEncoding, self).__init__(
            f"No compressor registered for encoding {content_encoding!r}"
        )
