"""Tests for the stats commands."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from typer.testing import CliRunner

from pomotrack_cli.commands.stats import app
from pomotrack_cli.models.core import DailyStats, PomodoroSession, TaskStats
from pomotrack_cli.services.stats_service import StatsService

runner = CliRunner()

TASK_STATS = [
    TaskStats(task_id="t1", task_name="Write", completed_pomodoros=3, total_focus_time=4500),
    TaskStats(task_id="t2", task_name="Read", completed_pomodoros=1, total_focus_time=1500),
]


def _session(completed: bool = True) -> PomodoroSession:
    return PomodoroSession(
        id="s1",
        task_id="t1",
        start_time=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
        end_time=datetime(2026, 3, 2, 9, 25, tzinfo=timezone.utc),
        duration=1500,
        completed=completed,
    )


@pytest.fixture(autouse=True)
def client(mocker, fake_client):
    mocker.patch("pomotrack_cli.commands.stats.get_client", return_value=fake_client)
    return fake_client


def test_summary_table(patch_methods) -> None:
    patch_methods(StatsService, task_stats=TASK_STATS)

    result = runner.invoke(app, ["summary"])

    assert result.exit_code == 0
    assert "Completed Pomodoros: 4" in result.stdout
    assert "1h 40m" in result.stdout
    assert "Write" in result.stdout


def test_summary_json(patch_methods) -> None:
    patch_methods(StatsService, task_stats=TASK_STATS)

    result = runner.invoke(app, ["summary", "-o", "json"])

    data = json.loads(result.stdout)
    assert data["completed_pomodoros"] == 4
    assert data["total_focus_time"] == 6000
    assert len(data["tasks"]) == 2


def test_summary_with_no_sessions(patch_methods) -> None:
    patch_methods(StatsService, task_stats=[])

    result = runner.invoke(app, ["summary"])

    assert result.exit_code == 0
    assert "Completed Pomodoros: 0" in result.stdout
    assert "0m" in result.stdout


def test_daily(patch_methods) -> None:
    patch_methods(
        StatsService,
        daily_stats=[DailyStats(date="2026-03-02", completed_pomodoros=3, total_focus_time=5400)],
    )

    result = runner.invoke(app, ["daily"])

    assert result.exit_code == 0
    assert "2026-03-02" in result.stdout
    assert "1.5h" in result.stdout


def test_daily_empty(patch_methods) -> None:
    patch_methods(StatsService, daily_stats=[])

    result = runner.invoke(app, ["daily"])

    assert "No sessions recorded yet" in result.stdout


def test_tasks_yaml(patch_methods) -> None:
    patch_methods(StatsService, task_stats=TASK_STATS)

    result = runner.invoke(app, ["tasks", "-o", "yaml"])

    assert result.exit_code == 0
    assert "task_name: Write" in result.stdout


def test_task_sessions(patch_methods) -> None:
    mocks = patch_methods(StatsService, task_sessions=[_session(), _session(False)])

    result = runner.invoke(app, ["task", "t1"])

    assert result.exit_code == 0
    mocks["task_sessions"].assert_awaited_once_with("t1")
    assert "Total Focus Time: 25m" in result.stdout


def test_sessions_range(patch_methods) -> None:
    mocks = patch_methods(StatsService, sessions=[_session()])

    result = runner.invoke(app, ["sessions", "--start", "2026-03-01", "--end", "2026-03-07"])

    assert result.exit_code == 0
    start, end = mocks["sessions"].await_args.args
    assert (start.year, start.month, start.day) == (2026, 3, 1)
    assert (end.year, end.month, end.day) == (2026, 3, 8)


def test_sessions_bad_date() -> None:
    result = runner.invoke(app, ["sessions", "--start", "March 1st"])

    assert result.exit_code == 2
