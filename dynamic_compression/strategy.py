GZIP_DEFAULT_LEVEL = 6
GZIP_MIN_LEVEL = 0
GZIP_MAX_LEVEL = 9

BROTLI_DEFAULT_LEVEL = 4
BROTLI_MIN_LEVEL = 0
BROTLI_MAX_LEVEL = 11


def _clamp(value, lower, upper):
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


class DynamicCompressionStrategy:
    """
    Settings container for dynamic response compression.

    It is read by the DynamicCompressionHandler to decide which encoding (if
    any) is applied to a response and at which level.

    The three ways of building it are:

        DynamicCompressionStrategy()
            gzip enabled at level 6, brotli disabled at level 4.

        DynamicCompressionStrategy(brotli_enabled, gzip_enabled)
            Only the flags change, default levels are kept.

        DynamicCompressionStrategy(brotli_enabled, brotli_level,
                                   gzip_enabled, gzip_level)
            Flags and levels. Levels go through the setters, so they are
            clamped.

    Levels out of range are never rejected, they are silently moved to the
    nearest bound (gzip: 0..9, brotli: 0..11). All setters return the
    instance itself so calls can be chained.

    There is no locking here. Configure it at startup and only read it
    while serving requests.
    """
    GZIP_DEFAULT_LEVEL = GZIP_DEFAULT_LEVEL
    BROTLI_DEFAULT_LEVEL = BROTLI_DEFAULT_LEVEL

    def __init__(self, brotli_enabled=False, *args, gzip_enabled=None,
                 brotli_level=None, gzip_level=None):
        # Positional forms: (brotli, gzip) or (brotli, brotli_lvl, gzip, gzip_lvl)
        if len(args) == 1:
            gzip_enabled = args[0]
        elif len(args) == 3:
            brotli_level, gzip_enabled, gzip_level = args
        elif args:
            raise TypeError(
                "DynamicCompressionStrategy expects (brotli_enabled, "
                "gzip_enabled) or (brotli_enabled, brotli_level, "
                "gzip_enabled, gzip_level)"
            )

        if gzip_enabled is None:
            gzip_enabled = True
        if brotli_level is None:
            brotli_level = BROTLI_DEFAULT_LEVEL
        if gzip_level is None:
            gzip_level = GZIP_DEFAULT_LEVEL

        self._brotli_enabled = False
        self._gzip_enabled = True
        self._brotli_level = BROTLI_DEFAULT_LEVEL
        self._gzip_level = GZIP_DEFAULT_LEVEL

        self.set_brotli_enabled(brotli_enabled)
        self.set_gzip_enabled(gzip_enabled)
        self.set_brotli_level(brotli_level)
        self.set_gzip_level(gzip_level)

    @classmethod
    def from_config(cls, config):
        """
        Build a strategy from the COMPRESSION section of a CompressionConfig.

        Missing keys use the default values.
        """
        return cls(
            brotli_enabled=config.get('BROTLI_ENABLED', False),
            brotli_level=config.get('BROTLI_LEVEL', BROTLI_DEFAULT_LEVEL),
            gzip_enabled=config.get('GZIP_ENABLED', True),
            gzip_level=config.get('GZIP_LEVEL', GZIP_DEFAULT_LEVEL),
        )

    def set_gzip_level(self, gzip_level: int) -> 'DynamicCompressionStrategy':
        """
        :param gzip_level: GZIP compression level. Valid range is 0..9
        """
        self._gzip_level = _clamp(gzip_level, GZIP_MIN_LEVEL, GZIP_MAX_LEVEL)
        return self

    def set_brotli_level(self,
                         brotli_level: int) -> 'DynamicCompressionStrategy':
        """
        :param brotli_level: Brotli compression level. Valid range is 0..11
        """
        self._brotli_level = _clamp(
            brotli_level, BROTLI_MIN_LEVEL, BROTLI_MAX_LEVEL
        )
        return self

    def set_gzip_enabled(self,
                         gzip_enabled: bool) -> 'DynamicCompressionStrategy':
        self._gzip_enabled = gzip_enabled
        return self

    def set_brotli_enabled(self,
                           brotli_enabled: bool) -> 'DynamicCompressionStrategy':
        self._brotli_enabled = brotli_enabled
        return self

    def get_gzip_level(self) -> int:
        return self._gzip_level

    def get_brotli_level(self) -> int:
        return self._brotli_level

    def is_gzip_enabled(self) -> bool:
        return self._gzip_enabled

    def is_brotli_enabled(self) -> bool:
        return self._brotli_enabled

    @property
    def gzip_level(self):
        return self._gzip_level

    @property
    def brotli_level(self):
        return self._brotli_level

    @property
    def gzip_enabled(self):
        return self._gzip_enabled

    @property
    def brotli_enabled(self):
        return self._brotli_enabled

    def __eq__(self, other):
        if not isinstance(other, DynamicCompressionStrategy):
            return NotImplemented
        return (
            self._brotli_enabled == other._brotli_enabled
            and self._gzip_enabled == other._gzip_enabled
            and self._brotli_level == other._brotli_level
            and self._gzip_level == other._gzip_level
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"{type(self).__name__}(brotli_enabled={self._brotli_enabled}, "
            f"brotli_level={self._brotli_level}, "
            f"gzip_enabled={self._gzip_enabled}, "
            f"gzip_level={self._gzip_level})"
        )
