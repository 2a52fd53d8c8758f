"""
Pytest configuration and shared fixtures.
This file is automatically loaded by pytest.
"""

import os
import sys

import pytest

# Add the tests directory to Python path for imports
test_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, test_root)

from fixtures.http_fixtures import FakeServer  # noqa: E402

from tsdb_sdk import FluxClient, FluxConnectionOptions, PlatformClient  # noqa: E402
from tsdb_sdk.internal.rest import RestClient  # noqa: E402

BASE_URL = "http://localhost:8086"


@pytest.fixture
def rest_client():
    """RestClient authenticated with a token."""
    client = RestClient(BASE_URL, token="my-token")
    yield client
    client.session.close()


@pytest.fixture
def server(rest_client):
    """Fake server behind ``rest_client``."""
    return FakeServer(rest_client.session)


@pytest.fixture
def platform_client():
    client = PlatformClient(BASE_URL, token="my-token", org="my-org")
    yield client
    client.rest.session.close()


@pytest.fixture
def platform_server(platform_client):
    return FakeServer(platform_client.rest.session)


@pytest.fixture
def flux_client():
    client = FluxClient(FluxConnectionOptions(url=BASE_URL, token="my-token", org="my-org"))
    yield client
    client.rest.session.close()


@pytest.fixture
def flux_server(flux_client):
    return FakeServer(flux_client.rest.session)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer environment variables out of the settings tests."""
    for name in list(os.environ):
        if name.startswith('TSDB_'):
            monkeypatch.delenv(name, raising=False)
