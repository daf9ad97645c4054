"""
Shared pytest fixtures.
"""

import httpx
import pytest

from locimages.config import ENV_CREDENTIALS
from locimages.utils.http_client import HTTPClient


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


def _refuse(request):
    raise AssertionError(f"unexpected network call to {request.url}")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure credentials from the developer's shell never leak into tests."""
    for name in ENV_CREDENTIALS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("LOCIMAGES_CONFIG", raising=False)


@pytest.fixture
def offline_transport():
    return RecordingTransport(_refuse)


@pytest.fixture
def offline_client(offline_transport):
    return HTTPClient({'timeout': 5}, transport=offline_transport)


@pytest.fixture
def stub_client():
    """Factory: HTTPClient whose requests are answered by ``handler``."""
    def build(handler):
        transport = RecordingTransport(handler)
        return HTTPClient({'timeout': 5}, transport=transport), transport
    return build
