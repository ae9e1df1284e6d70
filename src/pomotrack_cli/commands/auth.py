"""Authentication commands."""

import typer
from rich.prompt import Prompt

from pomotrack_cli.services.api.client import get_client
from pomotrack_cli.services.auth_service import AuthService
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_INVALID_ARGS
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


@app.command()
@command_wrapper(auth_required=False)
async def signup(
    username: str | None = typer.Option(None, "--username", help="Username"),
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Create a new account and log in."""
    if not username:
        username = Prompt.ask("Username")
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)
        confirm_password = Prompt.ask("Confirm password", password=True)
        if password != confirm_password:
            raise AppError("Passwords do not match", ERROR_INVALID_ARGS)

    if not username or not email or not password:
        raise AppError("Username, email and password are required", ERROR_INVALID_ARGS)

    async with get_client() as client:
        user = await AuthService(client).signup(username, email, password)
    format_success(f"Account created. Logged in as {user.username} ({user.email})")


@app.command()
@command_wrapper(auth_required=False)
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
    endpoint: str | None = typer.Option(None, "--endpoint", help="API endpoint URL"),
) -> None:
    """Login to PomoTrack."""
    if endpoint:
        get_config_service().set("api.endpoint", endpoint)

    # Prompt for credentials if not provided
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    if not email or not password:
        raise AppError("Email and password are required", ERROR_INVALID_ARGS)

    async with get_client() as client:
        user = await AuthService(client).login(email, password)
    format_success(f"Logged in as {user.username} ({user.email})")


@app.command()
@command_wrapper(auth_required=False)
def logout() -> None:
    """Logout and forget the stored token."""
    if not AuthService.is_authenticated():
        format_info("Not logged in")
        return
    get_config_service().clear_credentials()
    format_success("Logged out")


@app.command()
@command_wrapper(auth_required=False)
def whoami(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the logged-in user."""
    user = AuthService.get_current_user()
    if user is None:
        raise AppError("Not logged in. Use 'pomotrack auth login' to authenticate.", ERROR_AUTH_FAILURE)
    output = output or get_config_service().config.output.format
    format_output(user.model_dump(), output)
