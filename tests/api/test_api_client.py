"""Tests for API client."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from projectdesk.errors import BackendError, NotFoundError
from projectdesk.services.api.client import APIClient, get_client

SESSION = {
    "access_token": "user-token",
    "refresh_token": "refresh-1",
    "token_type": "bearer",
    "expires_at": None,
    "user": {"id": "user-1", "email": "ada@example.com"},
}


def _token_body(access_token: str) -> dict:
    return {
        "access_token": access_token,
        "refresh_token": "refresh-2",
        "expires_in": 3600,
        "user": {"id": "user-1", "email": "ada@example.com"},
    }


@pytest.fixture
def client(tmp_config):
    tmp_config.set("backend.anon_key", "anon-key")
    return APIClient(tmp_config)


def _mount(client: APIClient, handler) -> list[httpx.Request]:
    """Route the client's requests through *handler*, recording them."""
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client._client = httpx.AsyncClient(
        base_url=client.base_url, transport=httpx.MockTransport(record)
    )
    return seen


@pytest.mark.asyncio
async def test_client_initialization(tmp_config):
    """Test API client initialization."""
    client = get_client(tmp_config)

    assert client.base_url == "http://localhost:54321"
    assert client.timeout == 30
    assert client._client is None


@pytest.mark.asyncio
async def test_client_uses_env_override(tmp_config, monkeypatch):
    monkeypatch.setenv("PROJECTDESK_BACKEND_URL", "https://env.example.com")

    client = APIClient(tmp_config)

    assert client.base_url == "https://env.example.com"


def test_headers_without_session_use_anon_key(client):
    headers = client._get_headers()

    assert headers["apikey"] == "anon-key"
    assert headers["Authorization"] == "Bearer anon-key"
    assert headers["Content-Type"] == "application/json"


def test_headers_with_session_use_access_token(client, tmp_config):
    tmp_config.save_session(SESSION)

    assert client._get_headers()["Authorization"] == "Bearer user-token"
    assert client._get_headers(skip_auth=True)["Authorization"] == "Bearer anon-key"


@pytest.mark.asyncio
async def test_get_client_creates_httpx_client(client):
    """Test _get_client creates httpx client."""
    httpx_client = await client._get_client()

    assert isinstance(httpx_client, httpx.AsyncClient)
    assert client._client is not None

    await client.close()
    assert client._client is None


@pytest.mark.asyncio
async def test_request_success(client):
    seen = _mount(client, lambda request: httpx.Response(200, json=[{"id": "1"}]))

    response = await client.get("/rest/v1/projects", params={"select": "*"})

    assert response.json() == [{"id": "1"}]
    assert seen[0].url.path == "/rest/v1/projects"
    assert seen[0].url.params["select"] == "*"
    await client.close()


@pytest.mark.asyncio
async def test_server_error_is_not_retried(client):
    seen = _mount(client, lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(BackendError) as exc_info:
        await client.get("/rest/v1/projects")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "boom"
    assert len(seen) == 1
    await client.close()


@pytest.mark.asyncio
async def test_not_found_maps_to_not_found_error(client):
    _mount(client, lambda request: httpx.Response(404, json={"msg": "not here"}))

    with pytest.raises(NotFoundError, match="not here"):
        await client.get("/rest/v1/projects")
    await client.close()


@pytest.mark.asyncio
async def test_network_error_becomes_backend_error(client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mount(client, handler)

    with pytest.raises(BackendError, match="Network error") as exc_info:
        await client.get("/rest/v1/projects")

    assert exc_info.value.status_code is None
    await client.close()


@pytest.mark.asyncio
async def test_unauthorized_refreshes_once_and_reissues(client, tmp_config):
    tmp_config.save_session(SESSION)
    client.on_token_refreshed = AsyncMock()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/v1/token":
            assert request.url.params["grant_type"] == "refresh_token"
            assert json.loads(request.content) == {"refresh_token": "refresh-1"}
            return httpx.Response(200, json=_token_body("fresh-token"))
        if request.headers["Authorization"] == "Bearer fresh-token":
            return httpx.Response(200, json=[])
        return httpx.Response(401, json={"message": "JWT expired"})

    seen = _mount(client, handler)

    response = await client.get("/rest/v1/tasks")

    assert response.status_code == 200
    assert [r.url.path for r in seen] == ["/rest/v1/tasks", "/auth/v1/token", "/rest/v1/tasks"]
    assert tmp_config.load_session()["access_token"] == "fresh-token"
    client.on_token_refreshed.assert_awaited_once()
    await client.close()


@pytest.mark.asyncio
async def test_unauthorized_without_refresh_token_raises(client):
    seen = _mount(client, lambda request: httpx.Response(401, json={"message": "JWT expired"}))

    with pytest.raises(BackendError) as exc_info:
        await client.get("/rest/v1/tasks")

    assert exc_info.value.status_code == 401
    assert len(seen) == 1
    await client.close()


@pytest.mark.asyncio
async def test_failed_refresh_surfaces_original_error(client, tmp_config):
    tmp_config.save_session(SESSION)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/v1/token":
            return httpx.Response(400, json={"error_description": "Invalid Refresh Token"})
        return httpx.Response(401, json={"message": "JWT expired"})

    seen = _mount(client, handler)

    with pytest.raises(BackendError, match="JWT expired"):
        await client.get("/rest/v1/tasks")

    assert len(seen) == 2
    await client.close()


@pytest.mark.asyncio
async def test_post_method(client):
    """Test POST request method."""
    with patch.object(client, "request", new_callable=AsyncMock) as mock_request:
        await client.post("/test", json={"key": "value"})

    mock_request.assert_awaited_once_with(
        "POST", "/test", json={"key": "value"}, params=None, headers=None, skip_auth=False
    )
