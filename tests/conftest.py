import pytest

from dynamic_compression.config import CompressionConfig


@pytest.fixture
def config():
    return CompressionConfig()


@pytest.fixture
def large_body():
    return b"dynamic compression payload " * 200
