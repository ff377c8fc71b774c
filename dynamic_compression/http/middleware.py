import logging

from aiohttp import web

from dynamic_compression.handler import DynamicCompressionHandler

logger = logging.getLogger(__name__)

HANDLER_KEY = web.AppKey("compression_handler", DynamicCompressionHandler)


def compression_middleware(compression_handler=None):
    """
    Returns an aiohttp middleware that compresses the responses of the
    wrapped handlers.

    :param DynamicCompressionHandler compression_handler: Handler to use. When
    None, the one stored in the application under HANDLER_KEY is used.
    """
    @web.middleware
    async def middleware(request, handler):
        response = await handler(request)
        compressor = compression_handler or request.app.get(HANDLER_KEY)
        if compressor is None:
            logger.warning(
                "No DynamicCompressionHandler found, sending the response "
                "uncompressed"
            )
            return response
        return compressor.compress_response(request, response)

    return middleware
