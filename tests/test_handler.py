import gzip

import brotli
import pytest
from aiohttp import web
from aiohttp.test_utils import make_mocked_request
from prometheus_client import REGISTRY

from dynamic_compression.handler import DynamicCompressionHandler
from dynamic_compression.strategy import DynamicCompressionStrategy


def request_with(accept_encoding=None):
    headers = {}
    if accept_encoding is not None:
        headers["Accept-Encoding"] = accept_encoding
    return make_mocked_request("GET", "/", headers=headers)


@pytest.fixture
def both_enabled():
    return DynamicCompressionHandler(DynamicCompressionStrategy(True, True))


def test_small_body_is_not_compressed(both_enabled):
    assert both_enabled.choose_encoding("gzip, br", 1500) is None


def test_brotli_has_precedence(both_enabled):
    assert both_enabled.choose_encoding("gzip, deflate, br", 1501) == "br"


def test_gzip_when_brotli_not_accepted(both_enabled):
    assert both_enabled.choose_encoding("gzip, deflate", 5000) == "gzip"


def test_accept_encoding_is_case_insensitive(both_enabled):
    assert both_enabled.choose_encoding("GZIP", 5000) == "gzip"


def test_no_accept_encoding(both_enabled):
    assert both_enabled.choose_encoding(None, 5000) is None
    assert both_enabled.choose_encoding("", 5000) is None


def test_disabled_encodings_are_skipped():
    handler = DynamicCompressionHandler(
        DynamicCompressionStrategy(False, False)
    )
    assert handler.choose_encoding("gzip, br", 5000) is None


def test_default_strategy_only_gzip():
    handler = DynamicCompressionHandler(DynamicCompressionStrategy())
    assert handler.choose_encoding("br", 5000) is None
    assert handler.choose_encoding("br, gzip", 5000) == "gzip"


def test_without_strategy_uses_dynamic_gzip():
    handler = DynamicCompressionHandler(None, dynamic_gzip=True)
    assert handler.choose_encoding("br, gzip", 5000) == "gzip"
    assert handler.gzip_level == 6
    assert handler.brotli_level == 4

    handler = DynamicCompressionHandler(None, dynamic_gzip=False)
    assert handler.choose_encoding("br, gzip", 5000) is None


def test_custom_min_size():
    handler = DynamicCompressionHandler(min_size=10)
    assert handler.choose_encoding("gzip", 11) == "gzip"
    assert handler.choose_encoding("gzip", 10) is None


def test_compress_body_uses_strategy_level(mocker, large_body):
    strategy = DynamicCompressionStrategy(True, 11, True, 1)
    handler = DynamicCompressionHandler(strategy)
    get_compressor = mocker.patch(
        "dynamic_compression.handler.get_compressor",
        return_value=mocker.MagicMock(**{"compress.return_value": b"x"})
    )

    body, encoding = handler.compress_body(large_body, "br")
    assert (body, encoding) == (b"x", "br")
    get_compressor.assert_called_with("br", 11)

    handler.compress_body(large_body, "gzip")
    get_compressor.assert_called_with("gzip", 1)


def test_compress_body_counts_metrics(both_enabled, large_body):
    before = REGISTRY.get_sample_value(
        "compressed_responses_total", {"encoding": "br"}
    ) or 0
    both_enabled.compress_body(large_body, "br")
    after = REGISTRY.get_sample_value(
        "compressed_responses_total", {"encoding": "br"}
    )
    assert after == before + 1


def test_compress_response_brotli(both_enabled, large_body):
    response = web.Response(body=large_body)
    result = both_enabled.compress_response(request_with("br"), response)

    assert result is response
    assert response.headers["Content-Encoding"] == "br"
    assert response.headers["Vary"] == "Accept-Encoding"
    assert brotli.decompress(response.body) == large_body


def test_compress_response_gzip(both_enabled, large_body):
    response = web.Response(body=large_body, headers={"Vary": "Origin"})
    both_enabled.compress_response(request_with("gzip"), response)

    assert response.headers["Content-Encoding"] == "gzip"
    assert response.headers["Vary"] == "Origin, Accept-Encoding"
    assert gzip.decompress(response.body) == large_body


def test_compress_response_not_accepted(both_enabled, large_body):
    response = web.Response(body=large_body)
    both_enabled.compress_response(request_with(), response)

    assert "Content-Encoding" not in response.headers
    assert response.body == large_body


def test_already_encoded_response_untouched(both_enabled, large_body):
    response = web.Response(
        body=large_body, headers={"Content-Encoding": "identity"}
    )
    both_enabled.compress_response(request_with("br"), response)

    assert response.headers["Content-Encoding"] == "identity"
    assert response.body == large_body


def test_stream_response_untouched(both_enabled):
    response = web.StreamResponse()
    result = both_enabled.compress_response(request_with("br"), response)
    assert result is response
    assert "Content-Encoding" not in response.headers


def test_from_config(config):
    config['COMPRESSION']['BROTLI_ENABLED'] = True
    config['COMPRESSION']['MIN_SIZE'] = 100
    handler = DynamicCompressionHandler.from_config(config)

    assert handler.strategy == DynamicCompressionStrategy(True, True)
    assert handler.min_size == 100


def test_from_config_without_compression_section(config):
    config['COMPRESSION'] = None
    config['DYNAMIC_GZIP'] = False
    handler = DynamicCompressionHandler.from_config(config)

    assert handler.strategy is None
    assert handler.choose_encoding("gzip", 5000) is None


def test_from_config_explicit_strategy(config):
    strategy = DynamicCompressionStrategy(True, False)
    handler = DynamicCompressionHandler.from_config(config, strategy=strategy)
    assert handler.strategy is strategy


def test_response_with_aiohttp_compression_untouched(both_enabled,
                                                     large_body):
    response = web.Response(body=large_body)
    response.enable_compression()
    result = both_enabled.compress_response(request_with("br"), response)

    assert result is response
    assert "Content-Encoding" not in response.headers
    assert response.body == large_body


def test_negative_min_size_is_clamped():
    assert DynamicCompressionHandler(min_size=-1).min_size == 0


def test_empty_body_is_not_compressed():
    handler = DynamicCompressionHandler(min_size=-1)
    assert handler.compress_body(b"", "gzip") == (b"", None)
