"""
Pytest configuration and shared fixtures for the test suite.

Provides a fixed `GatewayConfig` and a fake generation client so no test
touches the network or depends on the caller's environment.
"""

import pytest
from fastapi.testclient import TestClient

from gateway.api.http_api import create_app
from gateway.config import GatewayConfig


class FakeGenerationClient:
    """Records calls and returns a canned result (or raises `error`)."""

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {
            "candidates": [{"content": {"parts": [{"text": "generated"}]}}]
        }
        self.error = error
        self.calls = []

    async def agenerate_content(self, model, contents):
        self.calls.append((model, contents))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def config():
    return GatewayConfig(model="gemini-test", api_key="test-key", port=3000)


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def http(config, fake_client):
    app = create_app(config, fake_client)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_client(config):
    """Build a `TestClient` over an app wired to the given fake client."""
    clients = []

    def _make(fake):
        client = TestClient(create_app(config, fake))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def fake_client_class():
    return FakeGenerationClient
