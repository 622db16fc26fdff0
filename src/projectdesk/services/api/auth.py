"""Authentication API endpoints."""

from projectdesk.services.api.client import APIClient


class AuthAPI:
    """Authentication API client (GoTrue endpoints under /auth/v1)."""

    def __init__(self, client: APIClient):
        self.client = client

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        """Exchange email and password for a session."""
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return response.json()

    async def refresh_session(self, refresh_token: str) -> dict:
        """Exchange a refresh token for a new session."""
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
            skip_auth=True,
        )
        return response.json()

    async def sign_out(self) -> None:
        """Revoke the current session on the server."""
        await self.client.post("/auth/v1/logout")

    async def get_user(self) -> dict:
        """Get the user behind the current access token."""
        response = await self.client.get("/auth/v1/user")
        return response.json()
