"""Tests for the config commands."""

from __future__ import annotations

from typer.testing import CliRunner

from pomotrack_cli.commands.config import app
from pomotrack_cli.services.config_service import get_config_service

runner = CliRunner()


def test_view() -> None:
    result = runner.invoke(app, ["view"])

    assert result.exit_code == 0
    assert "endpoint: http://localhost:5000/api" in result.stdout


def test_get() -> None:
    result = runner.invoke(app, ["get", "api.timeout"])

    assert result.exit_code == 0
    assert "30" in result.stdout


def test_get_unknown_key() -> None:
    result = runner.invoke(app, ["get", "api.nope"])

    assert result.exit_code == 5


def test_set_coerces_numbers() -> None:
    result = runner.invoke(app, ["set", "api.retry", "5"])

    assert result.exit_code == 0
    assert get_config_service().get("api.retry") == 5


def test_set_invalid_value() -> None:
    result = runner.invoke(app, ["set", "output.format", "xml"])

    assert result.exit_code == 2
    assert get_config_service().get("output.format") == "table"


def test_reset_key() -> None:
    get_config_service().set("output.format", "json")

    result = runner.invoke(app, ["reset", "output.format", "--yes"])

    assert result.exit_code == 0
    assert get_config_service().get("output.format") == "table"


def test_reset_requires_confirmation() -> None:
    get_config_service().set("output.format", "json")

    result = runner.invoke(app, ["reset"], input="n\n")

    assert result.exit_code == 0
    assert get_config_service().get("output.format") == "json"
