"""Configuration models.

``AppConfig`` is the JSON document kept in the user config directory;
``TimerSettings`` is stored separately by the settings store.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_API_ENDPOINT = "http://localhost:5000/api"


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default=DEFAULT_API_ENDPOINT)
    timeout: int = Field(default=30, gt=0)
    retry: int = Field(default=2, ge=0)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip whitespace and trailing slashes."""
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["table", "json", "yaml"] = Field(default="table")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main PomoTrack configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class TimerSettings(BaseModel):
    """User-configurable Pomodoro durations (minutes) and cycle length."""

    focus_duration: int = Field(default=25, gt=0)
    break_duration: int = Field(default=5, gt=0)
    long_break_duration: int = Field(default=15, gt=0)
    sessions_until_long_break: int = Field(default=4, gt=0)

    def duration_for(self, mode: str) -> int:
        """Return the configured duration for ``mode`` in seconds."""
        if mode == "focus":
            minutes = self.focus_duration
        elif mode == "break":
            minutes = self.break_duration
        else:  # long_break
            minutes = self.long_break_duration
        return minutes * 60
