"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from pomotrack_cli.models.focus.timer import TimerError
from pomotrack_cli.services.api.client import APIError
from pomotrack_cli.services.auth_service import AuthService
from pomotrack_cli.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_INVALID_STATE,
    exit_code_for_status,
)
from pomotrack_cli.utils.logger import get_logger
from pomotrack_cli.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require user to be authenticated."""
    if not AuthService.is_authenticated():
        format_error("Not logged in. Use 'pomotrack auth login' to authenticate.")
        raise typer.Exit(ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)

            def fail(message: str, exit_code: int, exc: Exception):
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s", cmd, elapsed, message
                )
                format_error(message)
                raise typer.Exit(code=exit_code) from exc

            try:
                # 1. Handle Auth
                if auth_required:
                    _require_auth()

                # 2. Run Sync or Async
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                fail(str(e), e.exit_code, e)

            except APIError as e:
                fail(e.message, exit_code_for_status(e.status_code), e)

            except TimerError as e:
                fail(str(e), ERROR_INVALID_STATE, e)

            except ValidationError as e:
                fail(_validation_message(e), ERROR_INVALID_ARGS, e)

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                # Generic fallback for unexpected crashes
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
