"""Unit tests for APIClient.

Requests go through an ``httpx.MockTransport`` so no network is used; the
retry backoff sleep is patched out.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from pomotrack_cli.services.api.client import APIClient, APIError, get_client
from pomotrack_cli.services.config_service import get_config_service


# ---------------------------------------------------------------------------
# Helpers & fixtures
# ---------------------------------------------------------------------------


def _client_with(handler, retry: int = 2) -> APIClient:
    get_config_service().set("api.retry", retry)
    client = APIClient()
    client._client = httpx.AsyncClient(
        base_url=client.base_url, transport=httpx.MockTransport(handler)
    )
    return client


@pytest.fixture
def no_backoff(mocker):
    return mocker.patch(
        "pomotrack_cli.services.api.client.asyncio.sleep", new=AsyncMock()
    )


# ---------------------------------------------------------------------------
# construction
# ---------------------------------------------------------------------------


class TestAPIClientInit:
    def test_defaults_to_local_backend(self) -> None:
        client = get_client()

        assert isinstance(client, APIClient)
        assert client.base_url == "http://localhost:5000/api"
        assert client.timeout == 30

    def test_environment_overrides_endpoint(self, monkeypatch) -> None:
        monkeypatch.setenv("POMOTRACK_API_URL", "https://pomo.example.com/api/")

        assert APIClient().base_url == "https://pomo.example.com/api"

    def test_auth_header_when_logged_in(self) -> None:
        get_config_service().save_credentials("tok-1", {"id": "u1"})

        headers = APIClient()._get_headers()

        assert headers["Authorization"] == "Bearer tok-1"

    def test_no_auth_header_when_skipped(self) -> None:
        get_config_service().save_credentials("tok-1")

        assert "Authorization" not in APIClient()._get_headers(skip_auth=True)

    def test_no_auth_header_when_logged_out(self) -> None:
        assert "Authorization" not in APIClient()._get_headers()


# ---------------------------------------------------------------------------
# requests
# ---------------------------------------------------------------------------


class TestRequest:
    @pytest.mark.asyncio
    async def test_success_returns_response(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"_id": "t1", "name": "A"}])

        client = _client_with(handler)
        response = await client.get("/tasks")
        await client.close()

        assert response.json()[0]["name"] == "A"
        assert seen[0].url.path == "/api/tasks"

    @pytest.mark.asyncio
    async def test_server_errors_are_retried(self, no_backoff) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503, json={"message": "busy"})
            return httpx.Response(201, json={"ok": True})

        client = _client_with(handler, retry=2)
        response = await client.post("/sessions", json={"taskId": "t1"})

        assert response.status_code == 201
        assert len(calls) == 3
        assert [c.args[0] for c in no_backoff.await_args_list] == [1, 2]

    @pytest.mark.asyncio
    async def test_server_error_after_retries_raises(self, no_backoff) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, json={"message": "Database unavailable"})

        client = _client_with(handler, retry=1)
        with pytest.raises(APIError) as exc_info:
            await client.get("/sessions")

        assert len(calls) == 2
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Database unavailable"

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self, no_backoff) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400, json={"message": "Task name is required"})

        client = _client_with(handler, retry=3)
        with pytest.raises(APIError) as exc_info:
            await client.post("/tasks", json={"name": ""})

        assert len(calls) == 1
        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Task name is required"
        no_backoff.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unauthorized_suggests_login(self) -> None:
        client = _client_with(lambda r: httpx.Response(401, json={"message": "Invalid token"}))

        with pytest.raises(APIError) as exc_info:
            await client.get("/tasks")

        assert exc_info.value.status_code == 401
        assert "Invalid token" in exc_info.value.message
        assert "pomotrack auth login" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_error_without_message_body(self) -> None:
        client = _client_with(lambda r: httpx.Response(404, text="Not Found"))

        with pytest.raises(APIError, match="status 404"):
            await client.get("/tasks/missing")

    @pytest.mark.asyncio
    async def test_transport_error_becomes_network_error(self, no_backoff) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client_with(handler, retry=1)
        with pytest.raises(APIError, match="Network error") as exc_info:
            await client.get("/tasks")

        assert exc_info.value.status_code is None
        assert no_backoff.await_count == 1

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        async with _client_with(lambda r: httpx.Response(200, json={})) as client:
            await client.delete("/tasks/t1")

        assert client._client is None
