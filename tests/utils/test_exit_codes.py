"""Tests for exit code helpers."""

from __future__ import annotations

import pytest

from pomotrack_cli.utils import exit_codes


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (None, exit_codes.ERROR_NETWORK),
        (400, exit_codes.ERROR_INVALID_ARGS),
        (401, exit_codes.ERROR_AUTH_FAILURE),
        (403, exit_codes.ERROR_AUTH_FAILURE),
        (404, exit_codes.ERROR_NOT_FOUND),
        (422, exit_codes.ERROR_INVALID_ARGS),
        (500, exit_codes.ERROR_NETWORK),
    ],
)
def test_exit_code_for_status(status, code) -> None:
    assert exit_codes.exit_code_for_status(status) == code


def test_names() -> None:
    assert exit_codes.get_exit_code_name(exit_codes.ERROR_INVALID_STATE) == "ERROR_INVALID_STATE"
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"
