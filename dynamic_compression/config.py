from collections import UserDict
from copy import deepcopy


DEFAULT_CONFIG = dict(
    # Used only when no COMPRESSION strategy is given to the handler.
    DYNAMIC_GZIP=True,
    COMPRESSION={
        'GZIP_ENABLED': True,
        'GZIP_LEVEL': 6,
        'BROTLI_ENABLED': False,
        'BROTLI_LEVEL': 4,
        'MIN_SIZE': 1500,  # Roughly one MTU
    },
    HTTP_SERVER={
        'host': '0.0.0.0',
        'port': 8080,
    },
    ENABLE_METRICS=False,
    METRICS={
        'HOST': '0.0.0.0',
        'PORT': 8000,
    },
)


class CompressionConfig(UserDict):
    """
    Compression, HTTP server and metrics settings.

    Sections given by the user (COMPRESSION, HTTP_SERVER, METRICS) only need
    the keys they change, the rest comes from DEFAULT_CONFIG. Defaults are
    copied, so editing a config never changes DEFAULT_CONFIG.
    """

    def _merge_section(self, user_values, defaults):
        merged = deepcopy(defaults)
        for key, value in user_values.items():
            if isinstance(value, dict) and isinstance(defaults.get(key), dict):
                value = self._merge_section(value, defaults[key])
            merged[key] = value
        return merged

    def __init__(self, config=None, default_config=None):
        if config is None:
            config = {}
        if default_config is None:
            default_config = DEFAULT_CONFIG
        final_config = self._merge_section(config, default_config)
        super(CompressionConfig, self).__init__(final_config)
