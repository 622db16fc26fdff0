"""Projects table endpoints."""

from typing import Any

from projectdesk.services.api.rest import TableAPI


class ProjectsAPI(TableAPI):
    """Projects API client."""

    table = "projects"

    async def list_projects(self) -> list[dict]:
        """List the current user's projects, newest first."""
        return await self.select(order="created_at", ascending=False)

    async def get_project(self, project_id: str) -> dict:
        """Get a specific project by ID."""
        return await self.select_single(project_id)

    async def create_project(
        self,
        name: str,
        *,
        user_id: str,
        description: str | None = None,
        **kwargs: Any,
    ) -> dict:
        """Create a new project owned by *user_id*."""
        data: dict[str, Any] = {"name": name, "user_id": user_id}

        if description:
            data["description"] = description

        data.update(kwargs)

        return await self.insert(data)
