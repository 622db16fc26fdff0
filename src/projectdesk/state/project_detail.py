"""State behind the detail pane of a single project."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, datetime

from projectdesk.errors import FormValidationError, NotFoundError, ProjectDeskError
from projectdesk.models import Project, Task, TaskPriority
from projectdesk.services.project_service import ProjectService
from projectdesk.services.task_service import TaskService
from projectdesk.state.events import Notifier, Observable, maybe_await
from projectdesk.utils.logger import get_logger

logger = get_logger("state.project_detail")

TASK_CREATED = "Task created successfully!"
TASK_DELETED = "Task deleted successfully!"
CONFIRM_DELETE = "Are you sure you want to delete this task?"

ConfirmCallback = Callable[[str], Awaitable[bool] | bool]


@dataclass
class TaskForm:
    """Raw values of the create-task form, as typed."""

    title: str = ""
    description: str = ""
    priority: str = TaskPriority.MEDIUM.value
    due_date: str = ""

    def clean(self) -> tuple[str, str | None, TaskPriority, date | None]:
        """Validate the form.

        Returns:
            (title, description, priority, due_date)

        Raises:
            FormValidationError: On a blank title, unknown priority or a
                due date that is not YYYY-MM-DD
        """
        title = self.title.strip()
        if not title:
            raise FormValidationError("title", "Task title is required")

        try:
            priority = TaskPriority(self.priority)
        except ValueError as e:
            raise FormValidationError("priority", f"Invalid priority: {self.priority}") from e

        due_date = None
        if self.due_date.strip():
            try:
                due_date = date.fromisoformat(self.due_date.strip())
            except ValueError as e:
                raise FormValidationError(
                    "due_date", "Due date must be a valid date (YYYY-MM-DD)"
                ) from e

        return title, self.description.strip() or None, priority, due_date


class ProjectDetailState(Observable):
    """Project header, task list and task actions for one project id."""

    def __init__(
        self,
        project_id: str,
        project_service: ProjectService,
        task_service: TaskService,
        notifier: Notifier,
        on_project_missing: Callable[[str], Awaitable[None] | None] | None = None,
    ):
        super().__init__()
        self.project_id = project_id
        self.project_service = project_service
        self.task_service = task_service
        self.notifier = notifier
        self.on_project_missing = on_project_missing

        self.project: Project | None = None
        self.tasks: list[Task] = []
        self.form = TaskForm()
        self.form_open = False
        self.submitting = False

    async def load(self) -> None:
        """Fetch the project and its tasks."""
        await self.load_project()
        if self.project is not None:
            await self.load_tasks()

    async def load_project(self) -> None:
        try:
            self.project = await self.project_service.get_project(self.project_id)
        except NotFoundError as e:
            logger.warning("project %s not found", self.project_id)
            self.project = None
            self.changed()
            self.notifier.error(str(e))
            if self.on_project_missing is not None:
                await maybe_await(self.on_project_missing(self.project_id))
            return
        except ProjectDeskError as e:
            logger.error("Error fetching project: %s", e)
            self.notifier.error(str(e))
            return
        self.changed()

    async def load_tasks(self) -> None:
        """Re-fetch the task list. On failure the previous list is kept."""
        try:
            self.tasks = await self.task_service.list_tasks(self.project_id)
        except ProjectDeskError as e:
            logger.error("Error fetching tasks: %s", e)
            self.notifier.error(str(e))
            return
        self.changed()

    def open_form(self) -> None:
        self.form_open = True
        self.changed()

    def cancel_form(self) -> None:
        self.form_open = False
        self.changed()

    async def submit_task(self) -> Task | None:
        """Create a task from the form.

        Returns:
            The created task, or None if nothing was created
        """
        if self.submitting:
            logger.debug("ignoring task submit while one is in flight")
            return None

        try:
            title, description, priority, due_date = self.form.clean()
        except FormValidationError as e:
            self.notifier.warning(str(e))
            return None

        self.submitting = True
        self.changed()
        try:
            task = await self.task_service.create_task(
                self.project_id,
                title,
                description=description,
                priority=priority,
                due_date=due_date,
            )
        except ProjectDeskError as e:
            logger.error("Error creating task: %s", e)
            self.notifier.error(str(e))
            return None
        finally:
            self.submitting = False
            self.changed()

        self.notifier.success(TASK_CREATED)
        self.form = TaskForm()
        self.form_open = False
        self.changed()
        await self.load_tasks()
        return task

    async def toggle_task(self, task: Task, *, now: datetime | None = None) -> None:
        """Flip completion of *task* and re-fetch."""
        try:
            await self.task_service.toggle_status(task, now=now)
        except ProjectDeskError as e:
            logger.error("Error updating task: %s", e)
            self.notifier.error(str(e))
            return
        await self.load_tasks()

    async def delete_task(self, task_id: str, confirm: ConfirmCallback | None = None) -> bool:
        """Delete a task after confirmation.

        Returns:
            True if the task was deleted
        """
        if confirm is not None and not await maybe_await(confirm(CONFIRM_DELETE)):
            return False

        try:
            await self.task_service.delete_task(task_id)
        except ProjectDeskError as e:
            logger.error("Error deleting task: %s", e)
            self.notifier.error(str(e))
            return False

        self.notifier.success(TASK_DELETED)
        await self.load_tasks()
        return True
