"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest

if TYPE_CHECKING:
    from pomotrack_cli.models.config_models import TimerSettings
    from pomotrack_cli.models.focus.state import TimerStateManager
    from pomotrack_cli.models.focus.timer import PomodoroTimer
    from pomotrack_cli.services.settings_service import SettingsStore


# ---------------------------------------------------------------------------
# Log directory isolation
# ---------------------------------------------------------------------------

_log_dir: str | None = None
_log_dir_patch = None


def pytest_configure(config):
    """Send the application log to a scratch directory for the whole run.

    Package modules create their logger at import time, which happens during
    collection, so the patch must be active before any test module loads.
    """
    global _log_dir, _log_dir_patch
    _log_dir = tempfile.mkdtemp(prefix="pomotrack-test-logs-")
    _log_dir_patch = patch("pomotrack_cli.utils.logger.user_log_dir", return_value=_log_dir)
    _log_dir_patch.start()


def pytest_unconfigure(config):
    global _log_dir, _log_dir_patch
    if _log_dir_patch is not None:
        _log_dir_patch.stop()
        _log_dir_patch = None
    for handler in logging.getLogger("pomotrack_cli").handlers:
        handler.close()
    if _log_dir is not None:
        shutil.rmtree(_log_dir, ignore_errors=True)
        _log_dir = None


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path, monkeypatch):
    """Point every platformdirs lookup at *tmp_path* and reset cached services."""
    from pomotrack_cli.services.config_service import get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")

    monkeypatch.delenv("POMOTRACK_API_URL", raising=False)
    get_config_service.cache_clear()
    with patch("pomotrack_cli.services.config_service.user_config_dir", return_value=config_dir), \
            patch("pomotrack_cli.services.config_service.user_data_dir", return_value=data_dir), \
            patch("pomotrack_cli.services.settings_service.user_config_dir", return_value=config_dir), \
            patch("pomotrack_cli.models.focus.state.user_data_dir", return_value=data_dir):
        yield tmp_path
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip authentication checks in all tests by default."""
    with patch("pomotrack_cli.commands.decorators._require_auth"):
        yield


# ---------------------------------------------------------------------------
# Timer helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder() -> AsyncMock:
    rec = AsyncMock()
    rec.record = AsyncMock(return_value=None)
    return rec


@pytest.fixture
def settings_store(tmp_path) -> SettingsStore:
    from pomotrack_cli.services.settings_service import SettingsStore

    return SettingsStore(tmp_path / "settings")


@pytest.fixture
def state_manager(tmp_path) -> TimerStateManager:
    from pomotrack_cli.models.focus.state import TimerStateManager

    return TimerStateManager(tmp_path / "state")


@pytest.fixture
def make_timer(settings_store, recorder, state_manager, clock):
    """Factory building a PomodoroTimer on the shared fixtures.

    The countdown interval defaults to an hour so tests drive ``tick()``
    themselves.
    """
    from pomotrack_cli.models.focus.timer import PomodoroTimer

    def _make(settings: TimerSettings | None = None, **kwargs) -> PomodoroTimer:
        if settings is not None:
            settings_store.set(settings)
        kwargs.setdefault("tick_interval", 3600)
        return PomodoroTimer(settings_store, recorder, state_manager, clock=clock, **kwargs)

    return _make


@pytest.fixture
def timer(make_timer) -> PomodoroTimer:
    return make_timer()
