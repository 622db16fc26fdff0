"""
Service container.

One ServiceContext is created at startup and injected into the store and the
views, so every part of the application shares a single HTTP client and a
single AuthService (and therefore a single set of session subscribers).
"""

from __future__ import annotations

from projectdesk.services.api.auth import AuthAPI
from projectdesk.services.api.client import APIClient
from projectdesk.services.api.projects import ProjectsAPI
from projectdesk.services.api.tasks import TasksAPI
from projectdesk.services.auth_service import AuthService
from projectdesk.services.config_service import ConfigService, get_config_service
from projectdesk.services.project_service import ProjectService
from projectdesk.services.task_service import TaskService


class ServiceContext:
    """Holds the shared client and the services built on it."""

    def __init__(self, client: APIClient, config_service: ConfigService):
        self.client = client
        self.config_service = config_service
        self.auth_service = AuthService(AuthAPI(client), config_service)
        self.project_service = ProjectService(ProjectsAPI(client), self.auth_service)
        self.task_service = TaskService(TasksAPI(client))

    async def __aenter__(self) -> ServiceContext:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP client."""
        await self.client.close()


def get_service_context(config_service: ConfigService | None = None) -> ServiceContext:
    """Build a ServiceContext for the current configuration."""
    config_service = config_service or get_config_service()
    return ServiceContext(APIClient(config_service), config_service)
