"""Pomodoro timer state machine.

``PomodoroTimer`` owns the single ``TimerState`` of the process and is the
only thing that mutates it. Transitions:

    idle --start--> running --pause--> paused --resume--> running
    any  --reset--> idle
    running --(countdown reaches 0)--> complete() --> idle (next mode)

Every status change writes the snapshot through ``TimerStateManager``. The
countdown is an ``asyncio`` task ticking once per second; it is only created
when an event loop is running, so the transitions themselves are usable from
synchronous code.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Protocol

from pomotrack_cli.models.config_models import TimerSettings
from pomotrack_cli.models.core import PomodoroSession
from pomotrack_cli.utils.logger import get_logger

from .state import TimerMode, TimerState, TimerStateManager

logger = get_logger("timer")

SESSION_NOT_SAVED = "Session not saved"


class TimerError(ValueError):
    """Base class for refused timer transitions."""


class InvalidTransitionError(TimerError):
    """The requested transition is not valid from the current status."""


class TaskRequiredError(TimerError):
    """A focus session cannot start without a selected task."""


class SettingsStore(Protocol):
    def get(self) -> TimerSettings: ...

    def set(self, settings: TimerSettings) -> None: ...


class SessionRecorder(Protocol):
    async def record(
        self,
        task_id: str,
        start_time: datetime,
        end_time: datetime,
        duration: int,
        completed: bool = True,
    ) -> PomodoroSession: ...


def _now() -> datetime:
    return datetime.now().astimezone()


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class PomodoroTimer:
    """Focus/break timer bound to a selected task."""

    def __init__(
        self,
        settings_store: SettingsStore,
        recorder: SessionRecorder,
        state_manager: TimerStateManager,
        *,
        clock: Callable[[], datetime] | None = None,
        on_change: Callable[[TimerState], None] | None = None,
        on_notice: Callable[[str, str], None] | None = None,
        tick_interval: float = 1.0,
    ):
        self.settings_store = settings_store
        self.settings = settings_store.get()
        self.recorder = recorder
        self.state_manager = state_manager
        self.state = TimerState.initial(self.settings)
        self.tick_interval = tick_interval

        self._clock = clock or _now
        self._on_change = on_change
        self._on_notice = on_notice

        self._countdown: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()
        self._completing = False

    # ----- Callbacks -----
    def set_on_change(
        self, fn: Callable[[TimerState], None] | None
    ) -> Callable[[TimerState], None] | None:
        """Replace the state-change callback and return the previous one."""
        previous, self._on_change = self._on_change, fn
        return previous

    def set_on_notice(
        self, fn: Callable[[str, str], None] | None
    ) -> Callable[[str, str], None] | None:
        """Replace the notice callback and return the previous one."""
        previous, self._on_notice = self._on_notice, fn
        return previous

    def _emit_change(self) -> None:
        if self._on_change:
            self._on_change(self.snapshot())

    def _notify(self, title: str, message: str) -> None:
        logger.info("%s: %s", title, message)
        if self._on_notice:
            self._on_notice(title, message)

    # ----- Queries -----
    def snapshot(self) -> TimerState:
        """Return a copy of the current state."""
        return dataclasses.replace(self.state)

    @property
    def is_completing(self) -> bool:
        return self._completing

    @property
    def is_counting_down(self) -> bool:
        return self._countdown is not None and not self._countdown.done()

    # ----- Transitions -----
    def select_task(self, task_id: str | None, task_name: str | None = None) -> None:
        """Bind the next focus run to a task (or clear the binding)."""
        self.state.selected_task_id = task_id
        self.state.selected_task_name = task_name if task_id else None
        self._emit_change()

    def start(self) -> None:
        """Start the countdown from idle."""
        if self.state.status != "idle":
            raise InvalidTransitionError(
                f"Cannot start: timer is {self.state.status}"
            )
        if self.state.mode == "focus" and not self.state.selected_task_id:
            raise TaskRequiredError("Select a task before starting a focus session")

        self.state.status = "running"
        self.state.start_time = self._clock().isoformat()
        self.state.suspended_at = None
        logger.debug("start %s (%ss)", self.state.mode, self.state.time_remaining)

        self._start_countdown()
        self._persist()
        self._emit_change()

    def pause(self) -> None:
        """Pause a running countdown."""
        if self.state.status != "running":
            raise InvalidTransitionError(
                f"Cannot pause: timer is {self.state.status}"
            )

        self._stop_countdown()
        self.state.status = "paused"
        self.state.start_time = None
        self.state.suspended_at = None
        logger.debug("pause at %ss", self.state.time_remaining)

        self._persist()
        self._emit_change()

    def resume(self) -> None:
        """Resume a paused countdown; the reference point restarts at now."""
        if self.state.status != "paused":
            raise InvalidTransitionError(
                f"Cannot resume: timer is {self.state.status}"
            )

        self.state.status = "running"
        self.state.start_time = self._clock().isoformat()
        logger.debug("resume at %ss", self.state.time_remaining)

        self._start_countdown()
        self._persist()
        self._emit_change()

    def reset(self) -> None:
        """Return to idle with a full interval for the current mode."""
        self._stop_countdown()
        self.state.status = "idle"
        # The next focus run always needs an explicit task choice.
        self.state.selected_task_id = None
        self.state.selected_task_name = None
        self._enter_mode(self.state.mode)
        self.state.start_time = None
        self.state.suspended_at = None
        logger.debug("reset %s", self.state.mode)

        self._persist()
        self._emit_change()

    def skip_break(self) -> None:
        """Abandon a break and go back to an idle focus interval."""
        if self.state.mode == "focus":
            return

        self._stop_countdown()
        self._enter_mode("focus")
        self.state.status = "idle"
        self.state.start_time = None
        self.state.suspended_at = None
        logger.debug("skip break")

        self._persist()
        self._emit_change()

    def update_settings(self, settings: TimerSettings) -> None:
        """Store new settings; an active countdown keeps its current length."""
        self.settings = settings
        self.settings_store.set(settings)

        if self.state.status == "idle":
            self._enter_mode(self.state.mode)
            self._persist()
            self._emit_change()

    async def tick(self) -> None:
        """Advance the countdown by one second."""
        if self.state.status != "running" or self._completing:
            return

        if self.state.time_remaining > 1:
            self.state.time_remaining -= 1
            self._emit_change()
            return

        self.state.time_remaining = 0
        await self.complete()

    async def complete(self) -> None:
        """Finish the running interval and move to the next mode.

        Concurrent triggers (a tick and a foreground reconciliation) collapse
        into one: the latch stays set until the session-record call returns.
        """
        if self._completing or self.state.status != "running":
            return
        self._completing = True
        self._stop_countdown()

        try:
            state = self.state
            if state.mode == "focus":
                task_id = state.selected_task_id
                start_time = state.start_datetime
                end_time = self._clock()
                duration = state.total_time

                if not task_id:
                    self._notify(
                        SESSION_NOT_SAVED,
                        "No task was selected for this focus session, so it "
                        "cannot be saved. Select a task before starting.",
                    )
                elif start_time is None:
                    self._notify(
                        SESSION_NOT_SAVED,
                        "Could not determine the session start time, so it "
                        "cannot be saved.",
                    )
                else:
                    await self._record(task_id, start_time, end_time, duration)

                state.selected_task_id = None
                state.selected_task_name = None
                state.sessions_completed += 1

                if state.sessions_completed % self.settings.sessions_until_long_break == 0:
                    self._enter_mode("long_break")
                else:
                    self._enter_mode("break")
            else:
                self._enter_mode("focus")

            state.status = "idle"
            state.start_time = None
            state.suspended_at = None
            logger.info(
                "interval complete, next %s (sessions: %d)",
                state.mode,
                state.sessions_completed,
            )

            self._persist()
            self._emit_change()
        finally:
            self._completing = False

    async def _record(
        self, task_id: str, start_time: datetime, end_time: datetime, duration: int
    ) -> None:
        try:
            await self.recorder.record(
                task_id, start_time, end_time, duration, completed=True
            )
        except Exception as e:
            logger.warning("failed to record session for task %s: %s", task_id, e)
            self._notify(
                SESSION_NOT_SAVED,
                "Your focus session could not be saved, so stats will not "
                f"update. ({e})",
            )

    # ----- Background reconciliation -----
    def enter_background(self) -> None:
        """Snapshot a running timer before the process is suspended."""
        if self.state.status != "running":
            return

        self._stop_countdown()
        self.state.suspended_at = self._clock().isoformat()
        logger.debug("background at %ss", self.state.time_remaining)
        self._persist()

    async def enter_foreground(self) -> None:
        """Subtract the time spent suspended and carry on (or complete)."""
        suspended_at = self.state.suspended_datetime
        self.state.suspended_at = None

        if self.state.status != "running" or suspended_at is None:
            return

        elapsed = self._elapsed_since(suspended_at)
        self.state.time_remaining = max(0, self.state.time_remaining - elapsed)
        logger.debug("foreground after %ss, %ss left", elapsed, self.state.time_remaining)

        if self.state.time_remaining == 0:
            await self.complete()
        else:
            self._start_countdown()
            self._emit_change()

    def handle_app_state(self, next_state: str) -> None:
        """Dispatch a lifecycle event ("background" or "active")."""
        if next_state == "background":
            self.enter_background()
        elif next_state == "active":
            self._spawn(self.enter_foreground())

    async def restore(self) -> TimerState:
        """Load the persisted snapshot, reconciling a running countdown."""
        snapshot = self.state_manager.load()
        if snapshot is None:
            return self.snapshot()

        self.state = snapshot
        if snapshot.status != "running":
            return self.snapshot()

        reference = snapshot.suspended_datetime or snapshot.start_datetime
        if reference is None:
            logger.warning("running snapshot without a start time; restoring paused")
            snapshot.status = "paused"
            self._persist()
            return self.snapshot()

        elapsed = self._elapsed_since(reference)
        snapshot.time_remaining = max(0, snapshot.time_remaining - elapsed)
        snapshot.suspended_at = None
        logger.debug("restored running %s, %ss left", snapshot.mode, snapshot.time_remaining)

        if snapshot.time_remaining > 0:
            self._start_countdown()
        else:
            await self.complete()
        return self.snapshot()

    async def shutdown(self) -> None:
        """Cancel the countdown and pending lifecycle work; state is kept."""
        self._stop_countdown()
        pending = [t for t in self._pending if t is not _current_task()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._pending.clear()

    # ----- Internals -----
    def _enter_mode(self, mode: TimerMode) -> None:
        duration = self.settings.duration_for(mode)
        self.state.mode = mode
        self.state.time_remaining = duration
        self.state.total_time = duration

    def _elapsed_since(self, reference: datetime) -> int:
        return max(0, int((self._clock() - reference).total_seconds()))

    def _persist(self) -> None:
        try:
            self.state_manager.save(self.state)
        except OSError as e:
            logger.warning("could not persist timer snapshot: %s", e)

    def _start_countdown(self) -> None:
        self._stop_countdown()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._countdown = loop.create_task(self._run_countdown())

    def _stop_countdown(self) -> None:
        countdown, self._countdown = self._countdown, None
        # complete() may run inside the countdown task itself
        if countdown is not None and countdown is not _current_task():
            countdown.cancel()

    async def _run_countdown(self) -> None:
        while self.state.status == "running":
            await asyncio.sleep(self.tick_interval)
            await self.tick()

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
