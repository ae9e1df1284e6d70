"""
Exit codes for PomoTrack CLI.

Semantic exit codes so scripts wrapping the CLI can tell failures apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, invalid credentials, etc.)
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, timeout, etc.)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5

# Timer transition refused (e.g. pause while idle)
ERROR_INVALID_STATE = 6


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_INVALID_STATE: "ERROR_INVALID_STATE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for_status(status_code: int | None) -> int:
    """Map an HTTP status code onto a CLI exit code."""
    if status_code is None:
        return ERROR_NETWORK
    if status_code in (401, 403):
        return ERROR_AUTH_FAILURE
    if status_code == 404:
        return ERROR_NOT_FOUND
    if 400 <= status_code < 500:
        return ERROR_INVALID_ARGS
    return ERROR_NETWORK
