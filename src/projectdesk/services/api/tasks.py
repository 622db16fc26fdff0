"""Tasks table endpoints."""

from typing import Any

from projectdesk.services.api.rest import TableAPI


class TasksAPI(TableAPI):
    """Tasks API client."""

    table = "tasks"

    async def list_tasks(self, project_id: str) -> list[dict]:
        """List a project's tasks, newest first."""
        return await self.select(
            filters={"project_id": project_id},
            order="created_at",
            ascending=False,
        )

    async def create_task(
        self,
        title: str,
        *,
        project_id: str,
        description: str | None = None,
        priority: str | None = None,
        due_date: str | None = None,
        **kwargs: Any,
    ) -> dict:
        """Create a new task in *project_id*."""
        data: dict[str, Any] = {"title": title, "project_id": project_id}

        if description:
            data["description"] = description
        if priority:
            data["priority"] = priority
        if due_date:
            data["due_date"] = due_date

        data.update(kwargs)

        return await self.insert(data)

    async def update_task(self, task_id: str, **updates: Any) -> dict:
        """Update a task."""
        return await self.update(task_id, updates)

    async def delete_task(self, task_id: str) -> dict:
        """Delete a task."""
        return await self.delete(task_id)
