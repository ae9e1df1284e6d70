"""Task management commands."""

import typer

from pomotrack_cli.services.api.client import get_client
from pomotrack_cli.services.config_service import get_config_service
from pomotrack_cli.services.task_service import TaskService
from pomotrack_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomotrack_cli.utils.typer_helpers import SuggestingGroup
from pomotrack_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


def _task_row(task) -> dict:
    return {
        "id": task.id,
        "name": task.name,
        "description": task.description,
    }


@app.command("list")
@command_wrapper
async def list_tasks(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    output = output or get_config_service().config.output.format
    async with get_client() as client:
        tasks = await TaskService(client).list_tasks()
    format_output([_task_row(t) for t in tasks], output)


@app.command("add")
@command_wrapper
async def add_task(
    name: str = typer.Argument(..., help="Task name"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Task description"
    ),
) -> None:
    """Create a task."""
    async with get_client() as client:
        try:
            task = await TaskService(client).create_task(name, description)
        except ValueError as e:
            raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Task created: {task.name} ({task.id})")


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="New name"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
) -> None:
    """Rename a task or change its description."""
    async with get_client() as client:
        service = TaskService(client)
        current = await service.get_task(task_id)
        try:
            task = await service.update_task(
                task_id,
                name if name is not None else current.name,
                description if description is not None else current.description,
            )
        except ValueError as e:
            raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Task updated: {task.name}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not typer.confirm(f"Delete task {task_id}?"):
        format_success("Cancelled")
        raise typer.Exit(0)

    async with get_client() as client:
        await TaskService(client).delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
