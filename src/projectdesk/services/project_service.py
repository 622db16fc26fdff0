"""Project service - Business logic for project operations."""

from __future__ import annotations

from projectdesk.errors import NotAuthenticatedError
from projectdesk.models import Project, ProjectCreate
from projectdesk.services.api.projects import ProjectsAPI
from projectdesk.services.auth_service import AuthService


class ProjectService:
    """Service for project business logic.

    Reads and writes go straight to the backend; callers re-fetch after every
    mutation instead of patching local state.
    """

    def __init__(self, projects_api: ProjectsAPI, auth_service: AuthService):
        """Initialize the project service.

        Args:
            projects_api: Table client for the projects table
            auth_service: Used to resolve the owner of new projects
        """
        self.projects_api = projects_api
        self.auth_service = auth_service

    async def list_projects(self) -> list[Project]:
        """List all projects visible to the current user, newest first."""
        rows = await self.projects_api.list_projects()
        return [Project(**row) for row in rows]

    async def get_project(self, project_id: str) -> Project:
        """Get a specific project by ID.

        Raises:
            NotFoundError: If the project does not exist
        """
        row = await self.projects_api.get_project(project_id)
        return Project(**row)

    async def create_project(
        self,
        name: str,
        *,
        description: str | None = None,
    ) -> Project:
        """Create a new project owned by the authenticated user.

        Args:
            name: Project name (required)
            description: Optional description

        Returns:
            The created Project as stored by the backend

        Raises:
            NotAuthenticatedError: If no user can be resolved
        """
        user = await self.auth_service.get_user()
        if user is None:
            raise NotAuthenticatedError()

        project_data = ProjectCreate(
            name=name,
            description=description or None,
            user_id=user.id,
        )
        row = await self.projects_api.create_project(
            project_data.name,
            user_id=project_data.user_id,
            description=project_data.description,
        )
        return Project(**row)
