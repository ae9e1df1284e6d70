"""Timer state snapshot with persistent storage."""

import json
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Literal, get_args

from platformdirs import user_data_dir

from pomotrack_cli.models.config_models import TimerSettings

TimerMode = Literal["focus", "break", "long_break"]
TimerStatus = Literal["idle", "running", "paused"]

STATE_KEY = "timer_state"


def _parse_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class TimerState:
    """Mutable timer state; also the shape of the persisted snapshot.

    ``start_time`` is the countdown reference point and is only set while
    running. ``suspended_at`` marks when ``time_remaining`` was captured for a
    backgrounded process.
    """

    mode: TimerMode = "focus"
    status: TimerStatus = "idle"
    time_remaining: int = 25 * 60  # seconds
    total_time: int = 25 * 60  # seconds
    sessions_completed: int = 0
    selected_task_id: str | None = None
    selected_task_name: str | None = None
    start_time: str | None = None  # ISO 8601
    suspended_at: str | None = None  # ISO 8601

    @classmethod
    def initial(cls, settings: TimerSettings) -> "TimerState":
        """Fresh idle focus state for the given settings."""
        duration = settings.duration_for("focus")
        return cls(time_remaining=duration, total_time=duration)

    @property
    def start_datetime(self) -> datetime | None:
        """Parse start time as datetime."""
        return _parse_iso(self.start_time)

    @property
    def suspended_datetime(self) -> datetime | None:
        """Parse suspension time as datetime."""
        return _parse_iso(self.suspended_at)

    @property
    def elapsed(self) -> int:
        """Seconds of the current interval already counted down."""
        return max(0, self.total_time - self.time_remaining)

    @property
    def progress(self) -> float:
        """Fraction of the current interval completed (0.0 - 1.0)."""
        if self.total_time <= 0:
            return 0.0
        return min(1.0, self.elapsed / self.total_time)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TimerState":
        """Create from dictionary, rejecting unknown modes and statuses."""
        if not isinstance(data, dict):
            raise TypeError("snapshot must be a JSON object")
        known = {f.name for f in fields(cls)}
        state = cls(**{k: v for k, v in data.items() if k in known})

        if state.mode not in get_args(TimerMode):
            raise ValueError(f"Unknown timer mode: {state.mode!r}")
        if state.status not in get_args(TimerStatus):
            raise ValueError(f"Unknown timer status: {state.status!r}")
        if state.total_time < 0 or not 0 <= state.time_remaining <= state.total_time:
            raise ValueError("time_remaining must be within 0..total_time")
        return state


class TimerStateManager:
    """Manages timer snapshot persistence under a fixed key."""

    def __init__(self, state_dir: Path | None = None):
        """Initialize state manager."""
        if state_dir is None:
            state_dir = Path(user_data_dir("pomotrack_cli")) / "state"

        self.state_dir = state_dir
        self.state_dir.mkdir(parents=True, exist_ok=True)
        self.state_file = self.state_dir / f"{STATE_KEY}.json"

    def save(self, state: TimerState) -> None:
        """Write the snapshot. Raises OSError when the file cannot be written."""
        tmp_file = self.state_file.with_suffix(".tmp")
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, indent=2)
        tmp_file.chmod(0o600)
        tmp_file.replace(self.state_file)

    def load(self) -> TimerState | None:
        """Load the snapshot. Returns None if file missing or invalid."""
        if not self.state_file.exists():
            return None

        try:
            with open(self.state_file, encoding="utf-8") as f:
                data = json.load(f)
            return TimerState.from_dict(data)
        except (OSError, json.JSONDecodeError, TypeError, ValueError):
            return None

    def delete(self) -> None:
        """Delete the snapshot file."""
        if self.state_file.exists():
            self.state_file.unlink()
