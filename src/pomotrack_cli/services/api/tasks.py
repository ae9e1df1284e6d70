"""Tasks API endpoints."""

from typing import Any

from .client import APIClient


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> list[dict[str, Any]]:
        """List the current user's tasks."""
        response = await self.client.get("/tasks")
        data = response.json()
        return data if isinstance(data, list) else []

    async def get_task(self, task_id: str) -> dict[str, Any]:
        """Get a specific task by ID."""
        response = await self.client.get(f"/tasks/{task_id}")
        return response.json()

    async def create_task(
        self, name: str, description: str | None = None
    ) -> dict[str, Any]:
        """Create a new task."""
        data: dict[str, Any] = {"name": name}
        if description is not None:
            data["description"] = description
        response = await self.client.post("/tasks", json=data)
        return response.json()

    async def update_task(
        self, task_id: str, name: str, description: str | None = None
    ) -> dict[str, Any]:
        """Replace a task's name and description."""
        data: dict[str, Any] = {"name": name}
        if description is not None:
            data["description"] = description
        response = await self.client.put(f"/tasks/{task_id}", json=data)
        return response.json()

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        await self.client.delete(f"/tasks/{task_id}")
