"""Authentication API endpoints."""

from typing import Any

from .client import APIClient


class AuthAPI:
    """Signup and login endpoints. Both return ``{"token", "user"}``."""

    def __init__(self, client: APIClient):
        self.client = client

    async def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Create an account."""
        response = await self.client.post(
            "/auth/signup",
            json={"username": username, "email": email, "password": password},
            skip_auth=True,
        )
        return response.json()

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email and password for a token."""
        response = await self.client.post(
            "/auth/login",
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return response.json()
