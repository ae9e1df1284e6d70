"""Pomodoro sessions and statistics API endpoints."""

from datetime import datetime
from typing import Any

from .client import APIClient


def _as_list(data: Any) -> list[dict[str, Any]]:
    return data if isinstance(data, list) else []


class SessionsAPI:
    """Sessions API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def create_session(
        self,
        task_id: str,
        start_time: datetime,
        end_time: datetime,
        duration: int,
        completed: bool = True,
    ) -> dict[str, Any]:
        """Store a completed focus session."""
        response = await self.client.post(
            "/sessions",
            json={
                "taskId": task_id,
                "startTime": start_time.isoformat(),
                "endTime": end_time.isoformat(),
                "duration": duration,
                "completed": completed,
            },
            # a replayed POST would store the session twice
            retry=0,
        )
        return response.json()

    async def list_sessions(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Sessions whose start time falls in the given range, newest first."""
        params: dict[str, Any] = {}
        if start_date:
            params["startDate"] = start_date.isoformat()
        if end_date:
            params["endDate"] = end_date.isoformat()
        response = await self.client.get("/sessions", params=params)
        return _as_list(response.json())

    async def list_task_sessions(self, task_id: str) -> list[dict[str, Any]]:
        """Sessions recorded against one task."""
        response = await self.client.get(f"/sessions/task/{task_id}")
        return _as_list(response.json())

    async def daily_stats(self) -> list[dict[str, Any]]:
        """Per-day totals for the last 30 active days."""
        response = await self.client.get("/sessions/stats/daily")
        return _as_list(response.json())

    async def task_stats(self) -> list[dict[str, Any]]:
        """Per-task totals, most focused first."""
        response = await self.client.get("/sessions/stats/tasks")
        return _as_list(response.json())
