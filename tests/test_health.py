import httpx
import pytest
from unittest.mock import AsyncMock, patch

from tests.conftest import UPSTREAM_URL, upstream_response
from user_proxy.config import Settings
from user_proxy.http_client import HttpClient
from user_proxy.services.user_service import dump_response


def test_health_check_upstream_up(client, upstream):
    upstream.return_value = upstream_response(200, json={"data": []})

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "user-proxy"
    assert data["upstream"] is True
    upstream.assert_awaited_once_with("GET", UPSTREAM_URL)


def test_health_check_upstream_down(client, upstream):
    upstream.side_effect = httpx.ConnectError("connection refused")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["upstream"] is False


def test_metrics_exposed(client, upstream):
    upstream.return_value = upstream_response(200, json={"data": []})
    client.get("/users")

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "user_proxy_request_duration_seconds" in response.text
    assert "user_proxy_upstream_calls_total" in response.text


def test_metrics_label_unmatched_paths_with_fixed_endpoint(client):
    assert client.get("/no-such-route/42").status_code == 404

    response = client.get("/metrics")
    assert 'endpoint="unmatched"' in response.text
    assert "/no-such-route/42" not in response.text


def test_metrics_label_matched_paths_with_route_template(client):
    client.get("/users/0")

    response = client.get("/metrics")
    assert 'endpoint="/users/{user_id}"' in response.text
    assert 'endpoint="/users/0"' not in response.text


def test_request_id_header(client):
    response = client.get("/users/0")
    assert "X-Request-ID" in response.headers
    assert response.headers["X-Request-ID"] != ""


def test_request_id_is_echoed(client):
    response = client.get("/users/0", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_process_time_header(client):
    response = client.get("/users/0")
    assert "X-Process-Time" in response.headers
    assert float(response.headers["X-Process-Time"]) >= 0


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("UPSTREAM_USERS_URL", "http://users.internal/api/users/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings.from_env()

    assert settings.users_url == "http://users.internal/api/users"
    assert settings.user_url(7) == "http://users.internal/api/users/7"
    assert settings.request_timeout == 2.5
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.port == 8080


def test_settings_defaults(monkeypatch):
    for name in ("UPSTREAM_USERS_URL", "REQUEST_TIMEOUT", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.users_url == "https://reqres.in/api/users"
    assert settings.request_timeout == 10
    assert settings.port == 3000


def test_dump_response():
    response = upstream_response(400, content=b'{"error":"Missing password"}', method="POST",
                                 headers={"Content-Type": "application/json"})

    dumped = dump_response(response)

    assert dumped.startswith("HTTP/1.1 400 Bad Request\r\n")
    assert "content-type: application/json\r\n" in dumped.lower()
    assert dumped.endswith('\r\n\r\n{"error":"Missing password"}')


@pytest.mark.asyncio
class TestHttpClient:
    async def test_request_before_start(self):
        http_client = HttpClient()
        with pytest.raises(RuntimeError):
            await http_client.request("GET", UPSTREAM_URL)

    async def test_start_applies_timeout(self):
        http_client = HttpClient(timeout=3)
        await http_client.start()
        try:
            assert http_client.client.timeout.read == 3
        finally:
            await http_client.stop()
        assert http_client.client is None

    async def test_close_failure_is_logged_not_raised(self):
        http_client = HttpClient()
        await http_client.start()
        with patch.object(http_client.client, "aclose", new_callable=AsyncMock) as mock_close, \
                patch("user_proxy.http_client.log_structured") as mock_log:
            mock_close.side_effect = OSError("socket already closed")
            await http_client.stop()

        assert http_client.client is None
        mock_log.assert_called_once()
        assert mock_log.call_args.kwargs["level"] == "ERROR"
