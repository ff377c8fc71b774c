import logging

from aiohttp import web
from aiohttp.web_log import AccessLogger

from dynamic_compression.config import CompressionConfig
from dynamic_compression.handler import DynamicCompressionHandler
from dynamic_compression.http.middleware import compression_middleware, \
    HANDLER_KEY
from dynamic_compression.metrics import start_metrics_server

logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("compression_config", CompressionConfig)


def create_app(config=None, strategy=None, middlewares=()):
    """
    Creates an aiohttp Application that compresses its responses.

    :param config: User configurations, merged with the default ones
    :param DynamicCompressionStrategy strategy: Overrides the COMPRESSION
    section of the configuration
    :param middlewares: Additional middlewares, run inside the compression
    one.
    """
    if not isinstance(config, CompressionConfig):
        config = CompressionConfig(config)

    app = web.Application(
        middlewares=[compression_middleware(), *middlewares]
    )
    app[CONFIG_KEY] = config
    app[HANDLER_KEY] = DynamicCompressionHandler.from_config(
        config, strategy=strategy
    )
    return app


def run_app(app, *,
            shutdown_timeout=60.0,
            ssl_context=None,
            print=logger.info,
            access_log_class=AccessLogger,
            access_log_format=AccessLogger.LOG_FORMAT,
            access_log=logger,
            handle_signals=True):
    """
    Runs the application with the HTTP_SERVER host and port, starting the
    metrics server first when it is enabled.
    """
    config = app[CONFIG_KEY]
    server_config = config['HTTP_SERVER']
    start_metrics_server(config)
    web.run_app(
        app,
        host=server_config['host'],
        port=server_config['port'],
        shutdown_timeout=shutdown_timeout,
        ssl_context=ssl_context,
        print=print,
        access_log_class=access_log_class,
        access_log_format=access_log_format,
        access_log=access_log,
        handle_signals=handle_signals,
    )
