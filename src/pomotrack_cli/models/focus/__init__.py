"""Pomodoro timer: state machine, snapshot storage and fullscreen UI."""

from .state import STATE_KEY, TimerMode, TimerState, TimerStateManager, TimerStatus
from .timer import (
    SESSION_NOT_SAVED,
    InvalidTransitionError,
    PomodoroTimer,
    TaskRequiredError,
    TimerError,
)

__all__ = [
    "STATE_KEY",
    "SESSION_NOT_SAVED",
    "InvalidTransitionError",
    "PomodoroTimer",
    "TaskRequiredError",
    "TimerError",
    "TimerMode",
    "TimerState",
    "TimerStateManager",
    "TimerStatus",
]
