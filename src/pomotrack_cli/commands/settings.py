"""Timer settings commands."""

import typer

from pomotrack_cli.models.config_models import TimerSettings
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.services.settings_service import get_settings_store
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper
from .timer import open_timer

app = typer.Typer(cls=SuggestingGroup, help="Timer durations and cycle length")


@app.command("show")
@command_wrapper(auth_required=False)
def show_settings(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the timer settings."""
    output = output or get_config_service().config.output.format
    format_output(get_settings_store().get().model_dump(), output)


@app.command("set")
@command_wrapper(auth_required=False)
async def set_settings(
    focus: int | None = typer.Option(None, "--focus", help="Focus minutes"),
    short_break: int | None = typer.Option(None, "--break", help="Break minutes"),
    long_break: int | None = typer.Option(
        None, "--long-break", help="Long break minutes"
    ),
    sessions: int | None = typer.Option(
        None, "--sessions", help="Focus sessions before a long break"
    ),
) -> None:
    """Change timer settings. Every value must be a positive whole number."""
    changes = {
        "focus_duration": focus,
        "break_duration": short_break,
        "long_break_duration": long_break,
        "sessions_until_long_break": sessions,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        format_info("Nothing to change")
        return

    async with open_timer() as timer:
        settings = TimerSettings.model_validate({**timer.settings.model_dump(), **changes})
        timer.update_settings(settings)
        status = timer.state.status

    format_success("Timer settings saved")
    if status != "idle":
        format_info("The active countdown keeps its length; new durations apply next interval")
