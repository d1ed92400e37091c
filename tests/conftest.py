"""
Test configuration and fixtures
"""

from unittest.mock import MagicMock

import pytest

from my_mcp_server.config import Settings
from my_mcp_server.dispatcher import Dispatcher
from my_mcp_server.server import build_registry


@pytest.fixture
def settings():
    """Settings with a fake Hugging Face token and fixed endpoints."""
    return Settings(
        hf_token="hf_test_token",
        nominatim_url="https://geo.example.test/search",
        open_meteo_url="https://weather.example.test/v1/forecast",
        hf_inference_url="https://hf.example.test/models",
    )


@pytest.fixture
def registry(settings):
    return build_registry(settings)


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry)


def http_response(status_code=200, json_data=None, content=b""):
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data
    response.content = content
    response.text = ""
    return response


@pytest.fixture
def make_response():
    return http_response
