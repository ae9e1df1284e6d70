"""Full-screen timer UI."""

import asyncio
import os
import signal
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomotrack_cli.models.config_models import TimerSettings
from pomotrack_cli.utils.ui.formatters import format_countdown

from .keyboard import KeyboardHandler
from .state import TimerState
from .timer import PomodoroTimer, TaskRequiredError, TimerError

MODE_LABELS = {
    "focus": "Focus Time",
    "break": "Short Break",
    "long_break": "Long Break",
}
MODE_COLORS = {
    "focus": "cyan",
    "break": "green",
    "long_break": "magenta",
}


def cycle_dots(state: TimerState, settings: TimerSettings) -> str:
    """Dots showing the position within the current long-break cycle."""
    per_cycle = settings.sessions_until_long_break
    done = state.sessions_completed % per_cycle
    if done == 0 and state.sessions_completed and state.mode == "long_break":
        done = per_cycle
    return " ".join("●" if i < done else "○" for i in range(per_cycle))


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.notice: tuple[str, str] | None = None

    def create_layout(self, state: TimerState, settings: TimerSettings) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        color = MODE_COLORS[state.mode]
        title = MODE_LABELS[state.mode]
        if state.status == "paused":
            title = f"{title} - PAUSED"
            color = "yellow"

        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        body_content = self._create_body_content(state, settings)
        layout["body"].update(Align.center(body_content, vertical="middle"))

        footer_text = self._create_footer_text(state)
        layout["footer"].update(Align.center(footer_text, vertical="middle"))

        return layout

    def _create_body_content(self, state: TimerState, settings: TimerSettings) -> Group:
        components = []

        if state.mode == "focus":
            if state.selected_task_name or state.selected_task_id:
                task_text = Text(
                    (state.selected_task_name or "")[:50], style="bold white", justify="center"
                )
                if state.selected_task_id:
                    task_text.append(f" (#{state.selected_task_id[-6:]})", style="dim")
            else:
                task_text = Text("No task selected", style="dim italic", justify="center")
            components.append(task_text)
            components.append(Text(""))

        remaining = state.time_remaining
        if state.status == "paused":
            timer_color = "yellow"
        elif state.status == "running" and remaining < 60:
            timer_color = "red"
        else:
            timer_color = MODE_COLORS[state.mode]

        components.append(
            Text(format_countdown(remaining), style=f"bold {timer_color}", justify="center")
        )
        components.append(Text(""))

        bar_width = 40
        filled = int(bar_width * state.progress)
        progress_text = Text(justify="center")
        progress_text.append(
            "▓" * filled + "░" * (bar_width - filled) + f"  {int(state.progress * 100)}%",
            style="dim",
        )
        components.append(progress_text)
        components.append(Text(""))
        components.append(
            Text(
                f"Sessions: {state.sessions_completed}   {cycle_dots(state, settings)}",
                style="dim",
                justify="center",
            )
        )

        if self.notice:
            title, message = self.notice
            components.append(Text(""))
            components.append(Text(f"{title}: {message}", style="yellow", justify="center"))

        return Group(*components)

    def _create_footer_text(self, state: TimerState) -> Text:
        if state.status == "running":
            hints = "'p' pause  •  'x' reset"
        elif state.status == "paused":
            hints = "'r' resume  •  'x' reset"
        else:
            hints = "'s' start  •  'x' reset"
        if state.mode != "focus":
            hints += "  •  'k' skip break"
        hints += "  •  'q' quit"
        return Text(hints, style="dim", justify="center")

    def show_notice(self, title: str, message: str) -> None:
        """Keep a notice on screen until the next one replaces it."""
        self.notice = (title, message)

    async def run(
        self,
        timer: PomodoroTimer,
        keyboard_factory: Callable[[], KeyboardHandler] = KeyboardHandler,
        refresh_interval: float = 0.25,
    ) -> str:
        """Run the fullscreen timer until the user leaves.

        Returns 'quit', 'task_required' (start was refused for lack of a
        task) or 'interrupted'.
        """
        loop = asyncio.get_running_loop()
        previous_notice = timer.set_on_notice(self.show_notice)

        with keyboard_factory() as keyboard, Live(
            self.create_layout(timer.state, timer.settings),
            console=self.console,
            refresh_per_second=4,
            screen=True,
        ) as live:
            handles_job_control = self._install_job_control(loop, timer, keyboard, live)

            def redraw(state: TimerState) -> None:
                live.update(self.create_layout(state, timer.settings))

            previous_change = timer.set_on_change(redraw)
            try:
                while True:
                    key = keyboard.get_key()
                    try:
                        if key == "q":
                            return "quit"
                        if key == "s":
                            timer.start()
                        elif key == "p":
                            timer.pause()
                        elif key == "r":
                            timer.resume()
                        elif key == "x":
                            timer.reset()
                        elif key == "k":
                            timer.skip_break()
                    except TaskRequiredError:
                        return "task_required"
                    except TimerError as e:
                        self.show_notice("Not now", str(e))

                    live.update(self.create_layout(timer.state, timer.settings))
                    await asyncio.sleep(refresh_interval)
            except (KeyboardInterrupt, asyncio.CancelledError):
                return "interrupted"
            finally:
                if handles_job_control:
                    loop.remove_signal_handler(signal.SIGTSTP)
                    loop.remove_signal_handler(signal.SIGCONT)
                timer.set_on_notice(previous_notice)
                timer.set_on_change(previous_change)

    @staticmethod
    def _install_job_control(loop, timer: PomodoroTimer, keyboard: KeyboardHandler, live: Live) -> bool:
        """Map Ctrl-Z / fg onto the timer's background and foreground events."""
        if not hasattr(signal, "SIGTSTP"):
            return False

        def on_suspend() -> None:
            timer.handle_app_state("background")
            live.stop()
            keyboard.suspend()
            os.kill(os.getpid(), signal.SIGSTOP)

        def on_continue() -> None:
            keyboard.restore()
            live.start(refresh=True)
            timer.handle_app_state("active")

        try:
            loop.add_signal_handler(signal.SIGTSTP, on_suspend)
            loop.add_signal_handler(signal.SIGCONT, on_continue)
        except (NotImplementedError, RuntimeError):
            return False
        return True


def show_state_summary(
    state: TimerState, settings: TimerSettings, console: Console | None = None
) -> None:
    """Print a one-off panel describing the timer state."""
    console = console or Console()
    color = MODE_COLORS[state.mode]

    task = state.selected_task_name or state.selected_task_id or "none"
    body = (
        f"[bold {color}]{MODE_LABELS[state.mode]}[/bold {color}]  ({state.status})\n\n"
        f"Remaining: [bold]{format_countdown(state.time_remaining)}[/bold]"
        f" of {format_countdown(state.total_time)}\n"
        f"Task: {task}\n"
        f"Sessions completed: {state.sessions_completed}  {cycle_dots(state, settings)}"
    )
    console.print(Panel(body, border_style=color, padding=(1, 2)))


def show_notice(title: str, message: str, console: Console | None = None) -> None:
    """Print a notice raised by the timer (e.g. an unsaved session)."""
    console = console or Console()
    console.print(Panel(message, title=title, border_style="yellow", padding=(0, 2)))
