from .middleware import compression_middleware, HANDLER_KEY
from .app import create_app, run_app, CONFIG_KEY

__all__ = [
    "compression_middleware", "create_app", "run_app", "HANDLER_KEY",
    "CONFIG_KEY"
]
