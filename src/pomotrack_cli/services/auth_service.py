"""Service for handling authentication-related operations."""

from __future__ import annotations

from pomotrack_cli.models.core import User
from pomotrack_cli.services.api.auth import AuthAPI
from pomotrack_cli.services.api.client import APIClient, APIError
from pomotrack_cli.services.config_service import ConfigService, get_config_service
from pomotrack_cli.utils.logger import get_logger

logger = get_logger("auth")


class AuthService:
    """Signup, login and logout against the backend; keeps the token locally."""

    def __init__(self, client: APIClient, config_service: ConfigService | None = None):
        self.api = AuthAPI(client)
        self.config_service = config_service or get_config_service()

    async def signup(self, username: str, email: str, password: str) -> User:
        """Create an account and store its token."""
        result = await self.api.signup(username, email, password)
        return self._store(result)

    async def login(self, email: str, password: str) -> User:
        """Login and store the token."""
        result = await self.api.login(email, password)
        return self._store(result)

    def logout(self) -> None:
        """Forget the stored token and user."""
        self.config_service.clear_credentials()
        logger.info("logged out")

    def current_user(self) -> User | None:
        """The user stored at login, if any."""
        return self.get_current_user(self.config_service)

    @staticmethod
    def get_current_user(config_service: ConfigService | None = None) -> User | None:
        credentials = (config_service or get_config_service()).load_credentials()
        if not credentials or not credentials.get("user"):
            return None
        return User.model_validate(credentials["user"])

    @staticmethod
    def is_authenticated(config_service: ConfigService | None = None) -> bool:
        """Check if the user is authenticated."""
        return (config_service or get_config_service()).load_credentials() is not None

    def _store(self, result: dict) -> User:
        token = result.get("token")
        if not token or not result.get("user"):
            raise APIError("Invalid response from server: no token received")
        user = User.model_validate(result["user"])
        self.config_service.save_credentials(token, user.model_dump())
        logger.info("authenticated as %s", user.email)
        return user
