"""Statistics service: daily and per-task aggregates from the backend."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pomotrack_cli.models.core import DailyStats, PomodoroSession, TaskStats
from pomotrack_cli.services.api.client import APIClient
from pomotrack_cli.services.api.sessions import SessionsAPI


@dataclass(frozen=True)
class StatsTotals:
    """Totals across all tasks."""

    completed_pomodoros: int
    total_focus_time: int  # seconds


class StatsService:
    """Read-only access to recorded sessions and their aggregates."""

    def __init__(self, client: APIClient):
        self.api = SessionsAPI(client)

    async def daily_stats(self) -> list[DailyStats]:
        """Per-day totals, most recent first."""
        return [DailyStats.model_validate(d) for d in await self.api.daily_stats()]

    async def task_stats(self) -> list[TaskStats]:
        """Per-task totals, most focused first."""
        return [TaskStats.model_validate(t) for t in await self.api.task_stats()]

    async def task_sessions(self, task_id: str) -> list[PomodoroSession]:
        """Sessions recorded for one task."""
        return [
            PomodoroSession.model_validate(s)
            for s in await self.api.list_task_sessions(task_id)
        ]

    async def sessions(
        self, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> list[PomodoroSession]:
        """Sessions started within the given range."""
        return [
            PomodoroSession.model_validate(s)
            for s in await self.api.list_sessions(start_date, end_date)
        ]

    @staticmethod
    def totals(task_stats: list[TaskStats]) -> StatsTotals:
        """Sum pomodoros and focus time over per-task stats."""
        return StatsTotals(
            completed_pomodoros=sum(s.completed_pomodoros for s in task_stats),
            total_focus_time=sum(s.total_focus_time for s in task_stats),
        )
