"""Main entry point for PomoTrack CLI."""

import typer

from pomotrack_cli import __version__
from pomotrack_cli.commands import auth, config, settings, stats, tasks, timer
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="pomotrack",
    cls=SuggestingGroup,
    help="Pomodoro focus timer that records sessions against your tasks",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(settings.app, name="settings", help="Timer durations and cycle length")
app.add_typer(stats.app, name="stats", help="Focus statistics")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]PomoTrack CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]API endpoint: {get_config_service().get_api_endpoint()}[/dim]")


if __name__ == "__main__":
    app()
