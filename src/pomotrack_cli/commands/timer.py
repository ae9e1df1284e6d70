"""Pomodoro timer commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import typer
from rich.prompt import Prompt
from rich.table import Table

from pomotrack_cli.models.focus.state import TimerStateManager
from pomotrack_cli.models.focus.timer import PomodoroTimer
from pomotrack_cli.models.focus.ui import TimerDisplay, show_notice, show_state_summary
from pomotrack_cli.services.api.client import APIClient, get_client
from pomotrack_cli.services.session_service import SessionRecorder
from pomotrack_cli.services.settings_service import get_settings_store
from pomotrack_cli.services.task_service import TaskService
from pomotrack_cli.utils.exit_codes import ERROR_NOT_FOUND
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.console import get_console
from pomotrack_cli.utils.ui.formatters import format_info, format_warning

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer for focus sessions")
console = get_console()


def get_timer(client: APIClient | None = None) -> PomodoroTimer:
    """Build a timer wired to the settings file, the backend and the snapshot."""
    return PomodoroTimer(
        get_settings_store(),
        SessionRecorder(client or get_client()),
        TimerStateManager(),
        on_notice=lambda title, message: show_notice(title, message, console),
    )


@asynccontextmanager
async def open_timer() -> AsyncIterator[PomodoroTimer]:
    """Restore the persisted timer for one command and tear it down after."""
    async with get_client() as client:
        timer = get_timer(client)
        await timer.restore()
        try:
            yield timer
        finally:
            await timer.shutdown()


async def choose_task(timer: PomodoroTimer, client: APIClient, task_id: str | None = None) -> None:
    """Bind the timer to a task, asking the user to pick one when no id is given."""
    service = TaskService(client)
    if task_id:
        task = await service.get_task(task_id)
    else:
        tasks = await service.list_tasks()
        if not tasks:
            raise AppError(
                "No tasks yet. Create one with 'pomotrack tasks add NAME'", ERROR_NOT_FOUND
            )

        table = Table(title="Select a task to focus on", show_header=True)
        table.add_column("#", style="cyan", width=3)
        table.add_column("Task", style="white")
        for i, t in enumerate(tasks, 1):
            table.add_row(str(i), t.name)
        console.print(table)

        choices = [str(i) for i in range(1, len(tasks) + 1)]
        choice = Prompt.ask("\nSelect task", choices=choices, default="1")
        task = tasks[int(choice) - 1]

    timer.select_task(task.id, task.name)


@app.command("start")
@command_wrapper
async def start_timer(
    task_id: str | None = typer.Option(
        None, "--task", "-t", help="Task ID to focus on (prompted when omitted)"
    ),
) -> None:
    """Start (or re-attach to) the timer in a fullscreen view."""
    async with get_client() as client:
        timer = get_timer(client)
        display = TimerDisplay(console)
        await timer.restore()

        try:
            if timer.state.status == "idle":
                if timer.state.mode == "focus":
                    await choose_task(timer, client, task_id)
                timer.start()
            elif task_id:
                format_warning("A timer is already active; --task is ignored")

            while True:
                outcome = await display.run(timer)
                if outcome != "task_required":
                    break
                await choose_task(timer, client)
                timer.start()
        finally:
            await timer.shutdown()

    show_state_summary(timer.state, timer.settings, console)
    if timer.state.status == "running":
        format_info("The timer keeps counting; 'pomotrack timer start' re-attaches")


@app.command("status")
@command_wrapper(auth_required=False)
async def timer_status() -> None:
    """Show the current timer state."""
    async with open_timer() as timer:
        show_state_summary(timer.state, timer.settings, console)


@app.command("pause")
@command_wrapper(auth_required=False)
async def pause_timer() -> None:
    """Pause the running timer."""
    async with open_timer() as timer:
        timer.pause()
        show_state_summary(timer.state, timer.settings, console)


@app.command("resume")
@command_wrapper(auth_required=False)
async def resume_timer() -> None:
    """Resume a paused timer."""
    async with open_timer() as timer:
        timer.resume()
        show_state_summary(timer.state, timer.settings, console)


@app.command("reset")
@command_wrapper(auth_required=False)
async def reset_timer() -> None:
    """Reset the current interval and clear the selected task."""
    async with open_timer() as timer:
        timer.reset()
        show_state_summary(timer.state, timer.settings, console)


@app.command("skip")
@command_wrapper(auth_required=False)
async def skip_break() -> None:
    """Skip the current break and go back to focus."""
    async with open_timer() as timer:
        if timer.state.mode == "focus":
            format_info("Not on a break")
            return
        timer.skip_break()
        show_state_summary(timer.state, timer.settings, console)
