"""PomoTrack domain models.

Pydantic models for the entities exchanged with the backend and for the
local configuration.
"""

from .config_models import APIConfig, AppConfig, OutputConfig, TimerSettings
from .core import DailyStats, PomodoroSession, Task, TaskStats, User

__all__ = [
    "APIConfig",
    "AppConfig",
    "OutputConfig",
    "TimerSettings",
    "DailyStats",
    "PomodoroSession",
    "Task",
    "TaskStats",
    "User",
]
