import httpx
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from user_proxy.config import Settings
from user_proxy.main import create_app

UPSTREAM_URL = "https://upstream.test/api/users"


def upstream_response(status_code, json=None, content=None, method="GET", url=UPSTREAM_URL, headers=None):
    """Build the response the mocked upstream hands back."""
    return httpx.Response(
        status_code,
        json=json,
        content=content,
        headers=headers,
        request=httpx.Request(method, url),
    )


@pytest.fixture
def settings():
    return Settings(upstream_users_url=UPSTREAM_URL, environment="test", request_timeout=2)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upstream(app, client):
    with patch.object(app.state.http_client, "request", new_callable=AsyncMock) as mock_request:
        yield mock_request
