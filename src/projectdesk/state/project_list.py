"""Project list pane state: the create-project form and selection callback."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from projectdesk.errors import FormValidationError, ProjectDeskError
from projectdesk.models import Project
from projectdesk.services.project_service import ProjectService
from projectdesk.state.events import Notifier, Observable, maybe_await
from projectdesk.utils.logger import get_logger

logger = get_logger("state.project_list")

PROJECT_CREATED = "Project created successfully!"


class ProjectListState(Observable):
    """Holds the create-project form.

    The list itself belongs to the parent store; this object reports new
    projects through *on_projects_change* and selections through *on_select*.
    """

    def __init__(
        self,
        project_service: ProjectService,
        notifier: Notifier,
        on_select: Callable[[str], Any],
        on_projects_change: Callable[[], Awaitable[None] | None],
    ):
        super().__init__()
        self.project_service = project_service
        self.notifier = notifier
        self.on_select = on_select
        self.on_projects_change = on_projects_change

        self.form_open = False
        self.name = ""
        self.description = ""
        self.submitting = False

    def open_form(self) -> None:
        self.form_open = True
        self.changed()

    def cancel_form(self) -> None:
        """Hide the form. Typed values are kept for the next time it opens."""
        self.form_open = False
        self.changed()

    async def select(self, project_id: str) -> None:
        await maybe_await(self.on_select(project_id))

    def validate(self) -> tuple[str, str | None]:
        """Return the cleaned (name, description).

        Raises:
            FormValidationError: If the name is blank
        """
        name = self.name.strip()
        if not name:
            raise FormValidationError("name", "Project name is required")
        return name, self.description.strip() or None

    async def submit(self) -> Project | None:
        """Create a project from the form.

        Returns:
            The created project, or None if nothing was created
        """
        if self.submitting:
            logger.debug("ignoring project submit while one is in flight")
            return None

        try:
            name, description = self.validate()
        except FormValidationError as e:
            self.notifier.warning(str(e))
            return None

        self.submitting = True
        self.changed()
        try:
            project = await self.project_service.create_project(
                name, description=description
            )
        except ProjectDeskError as e:
            logger.error("Error creating project: %s", e)
            self.notifier.error(str(e))
            return None
        finally:
            self.submitting = False
            self.changed()

        logger.info("created project %s", project.id)
        self.notifier.success(PROJECT_CREATED)
        self.form_open = False
        self.name = ""
        self.description = ""
        self.changed()

        await maybe_await(self.on_projects_change())
        await self.select(project.id)
        return project
