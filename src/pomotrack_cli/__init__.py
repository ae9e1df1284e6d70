"""PomoTrack CLI - Pomodoro focus timer bound to your tasks."""

__version__ = "0.1.0"
