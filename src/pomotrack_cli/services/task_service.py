"""Task service - business logic for task operations.

Sits between the commands and the tasks API. Also serves as the task
provider the timer's task picker lists from.
"""

from __future__ import annotations

from pomotrack_cli.models.core import Task
from pomotrack_cli.services.api.client import APIClient
from pomotrack_cli.services.api.tasks import TasksAPI


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Task name is required")
    return name


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None


class TaskService:
    """Service for task business logic."""

    def __init__(self, client: APIClient):
        self.api = TasksAPI(client)

    async def list_tasks(self) -> list[Task]:
        """All tasks of the current user."""
        return [Task.model_validate(t) for t in await self.api.list_tasks()]

    async def get_task(self, task_id: str) -> Task:
        """A single task by id."""
        return Task.model_validate(await self.api.get_task(task_id))

    async def create_task(self, name: str, description: str | None = None) -> Task:
        """Create a task. The name must not be blank."""
        data = await self.api.create_task(
            _clean_name(name), _clean_description(description)
        )
        return Task.model_validate(data)

    async def update_task(
        self, task_id: str, name: str, description: str | None = None
    ) -> Task:
        """Rename a task and/or change its description."""
        data = await self.api.update_task(
            task_id, _clean_name(name), _clean_description(description)
        )
        return Task.model_validate(data)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        await self.api.delete_task(task_id)
