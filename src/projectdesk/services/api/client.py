"""HTTP client for the hosted backend."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from projectdesk.errors import BackendError
from projectdesk.models.core import Session
from projectdesk.services.config_service import ConfigService, get_config_service
from projectdesk.utils.logger import get_logger

logger = get_logger("api")

TokenRefreshedCallback = Callable[[Session], Awaitable[None] | None]


class APIClient:
    """HTTP client for the backend's auth and REST endpoints.

    Every request carries the project's anon key; data requests also carry
    the stored session's access token so row-level security applies.
    """

    def __init__(self, config_service: ConfigService | None = None):
        self.config_service = config_service or get_config_service()
        backend = self.config_service.backend
        self.base_url = backend.url
        self.anon_key = backend.anon_key
        self.timeout = backend.timeout
        self.on_token_refreshed: TokenRefreshedCallback | None = None
        self._client: httpx.AsyncClient | None = None

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.anon_key:
            headers["apikey"] = self.anon_key

        token = self.anon_key
        if not skip_auth:
            session = self.config_service.load_session()
            if session and session.get("access_token"):
                token = session["access_token"]

        if token:
            headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _get_client(self, skip_auth: bool = False) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
            )
        # Always update headers to include latest auth token
        self._client.headers.update(self._get_headers(skip_auth=skip_auth))
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _try_refresh_token(self) -> bool:
        """
        Try to refresh the access token using the stored refresh token.
        Returns True if a new session was stored, False otherwise.
        """
        stored = self.config_service.load_session()
        if not stored or not stored.get("refresh_token"):
            return False

        try:
            response = await self.post(
                "/auth/v1/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": stored["refresh_token"]},
                skip_auth=True,
            )
            session = Session.from_token_response(response.json())
        except (BackendError, KeyError, ValueError) as e:
            logger.warning("session refresh failed: %s", e)
            return False

        self.config_service.save_session(session.model_dump(mode="json"))
        logger.info("session refreshed for user %s", session.user.id)

        if self.on_token_refreshed is not None:
            result = self.on_token_refreshed(session)
            if inspect.isawaitable(result):
                await result
        return True

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        response = await client.request(
            method=method,
            url=url,
            json=json,
            params=params,
            headers=headers,
        )
        response.raise_for_status()
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the backend.

        Failed requests are not retried. A 401 triggers one session refresh
        and a single re-issue of the request.

        Raises:
            BackendError: If the backend rejects the request or is unreachable
        """
        client = await self._get_client(skip_auth=skip_auth)
        url = f"{path}" if path.startswith("/") else f"/{path}"

        try:
            return await self._send(
                client, method, url, json=json, params=params, headers=headers
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401 and not skip_auth:
                if await self._try_refresh_token():
                    client = await self._get_client(skip_auth=skip_auth)
                    try:
                        return await self._send(
                            client,
                            method,
                            url,
                            json=json,
                            params=params,
                            headers=headers,
                        )
                    except httpx.HTTPStatusError as retry_error:
                        e = retry_error
                    except httpx.RequestError as retry_error:
                        logger.error("%s %s failed: %s", method, url, retry_error)
                        raise BackendError(f"Network error: {retry_error}") from retry_error

            logger.error("%s %s -> HTTP %s", method, url, e.response.status_code)
            raise BackendError.from_response(e.response) from e
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise BackendError(f"Network error: {e}") from e

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, params=params, headers=headers, skip_auth=skip_auth
        )

    async def patch(
        self,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request(
            "PATCH", path, json=json, params=params, headers=headers
        )

    async def delete(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, params=params, headers=headers)


def get_client(config_service: ConfigService | None = None) -> APIClient:
    """Get an API client instance."""
    return APIClient(config_service)
