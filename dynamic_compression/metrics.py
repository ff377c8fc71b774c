import logging

from prometheus_client import start_http_server, Counter, Summary

logger = logging.getLogger(__name__)


compressed_responses = Counter(
    'compressed_responses', 'Total number of compressed responses',
    ["encoding"]
)

uncompressed_responses = Counter(
    'uncompressed_responses',
    'Total number of responses sent without dynamic compression'
)

compression_ratio = Summary(
    'compression_ratio', 'Compressed size divided by the original size',
    ["encoding"]
)


def start_metrics_server(config):
    """
    Starts prometheus_client's HTTP server when ENABLE_METRICS is set.

    :param CompressionConfig config: Configuration holding ENABLE_METRICS and
    METRICS
    :return: True if the server was started
    """
    if not config['ENABLE_METRICS']:
        return False

    metrics_config = config['METRICS']
    start_http_server(metrics_config['PORT'], addr=metrics_config['HOST'])
    logger.info(
        "Prometheus Metrics Server Started\n\t-Listening at"
        f" {metrics_config['HOST']}:{metrics_config['PORT']}"
    )
    return True
