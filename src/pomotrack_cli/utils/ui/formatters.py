"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from pomotrack_cli.utils.ui.console import get_console

console = get_console()


def format_countdown(seconds: int) -> str:
    """Format seconds as a ``MM:SS`` countdown."""
    seconds = max(0, int(seconds))
    mins = seconds // 60
    secs = seconds % 60
    return f"{mins:02d}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Format seconds as ``Xh Ym`` (or ``Ym`` under an hour)."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_hours(seconds: int) -> str:
    """Format seconds as hours with one decimal, or minutes under an hour."""
    hours = seconds / 3600
    if hours >= 1:
        return f"{hours:.1f}h"
    return f"{int(seconds // 60)}m"


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Render a progress bar using block characters."""
    if max_value <= 0:
        ratio = 0.0
    else:
        ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any, title: str | None = None) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, dict):
        data = [data]

    columns = list(data[0].keys())
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column.replace("_", " ").title())

    for item in data:
        table.add_row(*["" if item.get(c) is None else str(item.get(c)) for c in columns])

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
