"""Statistics commands for recorded focus sessions."""

from datetime import datetime, timedelta

import typer
from rich.table import Table

from pomotrack_cli.services.api.client import get_client
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.services.stats_service import StatsService
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.console import get_console
from pomotrack_cli.utils.ui.formatters import (
    format_duration,
    format_hours,
    format_output,
    render_progress_bar,
)

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Focus statistics")


def _output_format(output: str | None) -> str:
    return output or get_config_service().config.output.format


def _dump(items) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


@app.command("summary")
@command_wrapper
async def show_summary(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show total pomodoros and focus time across all tasks."""
    async with get_client() as client:
        task_stats = await StatsService(client).task_stats()
    totals = StatsService.totals(task_stats)

    output = _output_format(output)
    if output != "table":
        format_output(
            {
                "completed_pomodoros": totals.completed_pomodoros,
                "total_focus_time": totals.total_focus_time,
                "tasks": _dump(task_stats),
            },
            output,
        )
        return

    console.print("\n[bold cyan]🍅 Focus Summary[/bold cyan]\n")
    console.print(f"Completed Pomodoros: [bold]{totals.completed_pomodoros}[/bold]")
    console.print(
        f"Total Focus Time: [bold]{format_duration(totals.total_focus_time)}[/bold]"
    )

    if task_stats:
        console.print("\n[bold]Top Tasks:[/bold]")
        top = max(s.total_focus_time for s in task_stats)
        for stat in task_stats[:5]:
            bar = render_progress_bar(stat.total_focus_time, top)
            name = (stat.task_name or stat.task_id)[:30]
            console.print(f"  {name:<30} {bar}  {format_hours(stat.total_focus_time)}")
    console.print()


@app.command("daily")
@command_wrapper
async def show_daily(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show completed pomodoros per day."""
    async with get_client() as client:
        daily = await StatsService(client).daily_stats()

    output = _output_format(output)
    if output != "table":
        format_output(_dump(daily), output)
        return
    if not daily:
        console.print("[yellow]No sessions recorded yet[/yellow]")
        return

    top = max(d.total_focus_time for d in daily)
    table = Table(title="Daily Focus", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Pomodoros", justify="right")
    table.add_column("Focus Time", justify="right")
    table.add_column("")
    for day in daily:
        table.add_row(
            day.date,
            str(day.completed_pomodoros),
            format_hours(day.total_focus_time),
            render_progress_bar(day.total_focus_time, top),
        )
    console.print(table)


@app.command("tasks")
@command_wrapper
async def show_tasks(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show completed pomodoros per task."""
    async with get_client() as client:
        task_stats = await StatsService(client).task_stats()

    output = _output_format(output)
    if output != "table":
        format_output(_dump(task_stats), output)
        return
    if not task_stats:
        console.print("[yellow]No sessions recorded yet[/yellow]")
        return

    table = Table(title="Focus by Task", show_header=True, header_style="bold magenta")
    table.add_column("Task", style="cyan")
    table.add_column("Pomodoros", justify="right")
    table.add_column("Focus Time", justify="right")
    for stat in task_stats:
        table.add_row(
            stat.task_name or stat.task_id,
            str(stat.completed_pomodoros),
            format_duration(stat.total_focus_time),
        )
    console.print(table)


def _sessions_table(sessions, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Task")
    table.add_column("Duration", justify="right")
    table.add_column("Status", justify="center")
    for session in sessions:
        start = session.start_time.astimezone()
        end = session.end_time.astimezone()
        status = "[green]✓[/green]" if session.completed else "[yellow]✗[/yellow]"
        table.add_row(
            start.strftime("%Y-%m-%d"),
            f"{start.strftime('%H:%M')} - {end.strftime('%H:%M')}",
            session.task_id[-8:],
            format_duration(session.duration),
            status,
        )
    return table


@app.command("task")
@command_wrapper
async def show_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the sessions recorded for one task."""
    async with get_client() as client:
        sessions = await StatsService(client).task_sessions(task_id)

    output = _output_format(output)
    if output != "table":
        format_output(_dump(sessions), output)
        return
    if not sessions:
        console.print("[yellow]No sessions recorded for this task[/yellow]")
        return

    console.print(_sessions_table(sessions, f"Sessions ({len(sessions)})"))
    total = sum(s.duration for s in sessions if s.completed)
    console.print(f"Total Focus Time: [bold]{format_duration(total)}[/bold]")


@app.command("sessions")
@command_wrapper
async def show_sessions(
    start: datetime | None = typer.Option(
        None, "--start", help="First day (YYYY-MM-DD)", formats=["%Y-%m-%d"]
    ),
    end: datetime | None = typer.Option(
        None, "--end", help="Last day, inclusive (YYYY-MM-DD)", formats=["%Y-%m-%d"]
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List sessions started within a date range."""
    if start is not None:
        start = start.astimezone()
    if end is not None:
        end = (end + timedelta(days=1)).astimezone()

    async with get_client() as client:
        sessions = await StatsService(client).sessions(start, end)

    output = _output_format(output)
    if output != "table":
        format_output(_dump(sessions), output)
        return
    if not sessions:
        console.print("[yellow]No sessions in this range[/yellow]")
        return
    console.print(_sessions_table(sessions, f"Sessions ({len(sessions)})"))
