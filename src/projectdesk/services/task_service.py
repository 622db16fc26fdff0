"""Task service - Business logic for task operations."""

from __future__ import annotations

from datetime import UTC, date, datetime

from projectdesk.models import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from projectdesk.services.api.tasks import TasksAPI


def toggled_status(status: TaskStatus) -> TaskStatus:
    """Status a task moves to when its completion toggle is used.

    Completed tasks go back to todo; anything else (including in_progress)
    becomes completed.
    """
    if status == TaskStatus.COMPLETED:
        return TaskStatus.TODO
    return TaskStatus.COMPLETED


def status_update(status: TaskStatus, now: datetime | None = None) -> TaskUpdate:
    """Build the write for a status change.

    completed_at is stamped when the new status is completed and cleared
    otherwise.
    """
    if status == TaskStatus.COMPLETED:
        return TaskUpdate(status=status, completed_at=now or datetime.now(UTC))
    return TaskUpdate(status=status, completed_at=None)


class TaskService:
    """Service for task business logic."""

    def __init__(self, tasks_api: TasksAPI):
        self.tasks_api = tasks_api

    async def list_tasks(self, project_id: str) -> list[Task]:
        """List a project's tasks, newest first."""
        rows = await self.tasks_api.list_tasks(project_id)
        return [Task(**row) for row in rows]

    async def create_task(
        self,
        project_id: str,
        title: str,
        *,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: date | None = None,
    ) -> Task:
        """Create a task in a project.

        Args:
            project_id: Owning project
            title: Task title (required)
            description: Optional details
            priority: low, medium (default) or high
            due_date: Optional datetime.date

        Returns:
            Created Task as stored by the backend
        """
        task_data = TaskCreate(
            title=title,
            description=description or None,
            priority=priority,
            due_date=due_date,
            project_id=project_id,
        )
        row = await self.tasks_api.create_task(
            task_data.title,
            project_id=task_data.project_id,
            description=task_data.description,
            priority=task_data.priority.value,
            due_date=task_data.due_date.isoformat() if task_data.due_date else None,
        )
        return Task(**row)

    async def set_status(
        self, task_id: str, status: TaskStatus, *, now: datetime | None = None
    ) -> Task:
        """Write a new status, keeping completed_at consistent with it."""
        updates = status_update(status, now)
        row = await self.tasks_api.update_task(
            task_id, **updates.model_dump(mode="json", exclude_unset=True)
        )
        return Task(**row)

    async def toggle_status(self, task: Task, *, now: datetime | None = None) -> Task:
        """Flip a task between todo and completed."""
        return await self.set_status(task.id, toggled_status(task.status), now=now)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist
        """
        await self.tasks_api.delete_task(task_id)
