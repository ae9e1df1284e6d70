"""API client for the PomoTrack backend."""

import asyncio
from typing import Any

import httpx

from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.utils.logger import get_logger

logger = get_logger("api")


class APIError(Exception):
    """A request failed; ``status_code`` is None for transport errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull ``{"message": ...}`` out of an error body when the server sends one."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status {response.status_code}"


class APIClient:
    """HTTP client for the PomoTrack API."""

    def __init__(self):
        self.config_manager = get_config_service()
        self.config = self.config_manager.config
        self.base_url = self.config_manager.get_api_endpoint()
        self.timeout = self.config.api.timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if not skip_auth:
            credentials = self.config_manager.load_credentials()
            if credentials and "token" in credentials:
                headers["Authorization"] = f"Bearer {credentials['token']}"

        return headers

    async def _get_client(self, skip_auth: bool = False) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
            )
        # Always refresh headers so a new login is picked up
        headers = self._get_headers(skip_auth=skip_auth)
        if skip_auth:
            self._client.headers.pop("Authorization", None)
        self._client.headers.update(headers)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        retry: int | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the API.

        Server errors and transport failures are retried with exponential
        backoff; client errors (4xx) are raised immediately as ``APIError``.
        """
        if retry is None:
            retry = self.config.api.retry

        client = await self._get_client(skip_auth=skip_auth)
        url = f"{path}" if path.startswith("/") else f"/{path}"

        last_error: APIError | None = None
        for attempt in range(retry + 1):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                )
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                message = _error_message(e.response)
                if status_code == 401 and not skip_auth:
                    message = f"{message}. Please login again: pomotrack auth login"
                if 400 <= status_code < 500:
                    logger.info("%s %s -> %s", method, url, status_code)
                    raise APIError(message, status_code) from e
                last_error = APIError(message, status_code)
            except httpx.RequestError as e:
                last_error = APIError(
                    f"Network error: could not connect to {self.base_url} ({e})"
                )

            logger.warning(
                "%s %s failed (attempt %d/%d): %s",
                method,
                url,
                attempt + 1,
                retry + 1,
                last_error,
            )
            if attempt < retry:
                await asyncio.sleep(2**attempt)

        assert last_error is not None
        raise last_error

    async def get(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        retry: int | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, retry=retry, skip_auth=skip_auth
        )

    async def put(
        self, path: str, *, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client() -> APIClient:
    """Get an API client instance."""
    return APIClient()
