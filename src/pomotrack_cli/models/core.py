"""Core domain models shared by the API layer and the timer.

The backend speaks camelCase and MongoDB-style ``_id`` keys; the models accept
both that and their own snake_case field names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(_APIModel):
    """Authenticated user."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    username: str
    email: str


class Task(_APIModel):
    """Task model."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    description: str | None = None
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("userId", "user_id")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at")
    )


class PomodoroSession(_APIModel):
    """A completed focus interval as stored by the backend. Never mutated."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    task_id: str = Field(validation_alias=AliasChoices("taskId", "task_id"))
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("userId", "user_id")
    )
    start_time: datetime = Field(validation_alias=AliasChoices("startTime", "start_time"))
    end_time: datetime = Field(validation_alias=AliasChoices("endTime", "end_time"))
    duration: int = Field(ge=0)  # seconds
    completed: bool = True


class DailyStats(_APIModel):
    """Completed pomodoros and focus seconds for one calendar day."""

    date: str
    completed_pomodoros: int = Field(
        default=0,
        validation_alias=AliasChoices("completedPomodoros", "completed_pomodoros"),
    )
    total_focus_time: int = Field(
        default=0, validation_alias=AliasChoices("totalFocusTime", "total_focus_time")
    )


class TaskStats(_APIModel):
    """Completed pomodoros and focus seconds for one task."""

    task_id: str = Field(validation_alias=AliasChoices("taskId", "task_id"))
    task_name: str | None = Field(
        default=None, validation_alias=AliasChoices("taskName", "task_name")
    )
    completed_pomodoros: int = Field(
        default=0,
        validation_alias=AliasChoices("completedPomodoros", "completed_pomodoros"),
    )
    total_focus_time: int = Field(
        default=0, validation_alias=AliasChoices("totalFocusTime", "total_focus_time")
    )
