"""Pytest configuration for llm-core tests."""

import os
from unittest.mock import patch

import httpx
import pytest


@pytest.fixture(autouse=True)
def mock_api_keys():
    """Mock all API keys for tests."""
    with patch.dict(
        os.environ,
        {
            "OPENAI_API_KEY": "test-openai-key",
        },
    ):
        yield


@pytest.fixture
def make_transport():
    """Build an httpx.MockTransport replaying the given responses and recording requests."""

    def _make(*responses):
        requests = []
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            response = queue.pop(0)
            if isinstance(response, Exception):
                raise response
            return response

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _make
