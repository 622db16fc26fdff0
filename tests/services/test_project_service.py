"""Unit tests for ProjectService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from projectdesk.errors import NotAuthenticatedError, NotFoundError
from projectdesk.models import ProjectStatus, User
from projectdesk.services.project_service import ProjectService


def _project_row(**overrides) -> dict:
    row = {
        "id": "project-1",
        "name": "Alpha",
        "description": None,
        "created_at": "2026-10-01T09:00:00+00:00",
        "user_id": "user-1",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def mock_api():
    api = MagicMock()
    api.list_projects = AsyncMock(return_value=[])
    api.get_project = AsyncMock(return_value=_project_row())
    api.create_project = AsyncMock(return_value=_project_row())
    return api


@pytest.fixture()
def mock_auth():
    auth = MagicMock()
    auth.get_user = AsyncMock(return_value=User(id="user-1", email="ada@example.com"))
    return auth


@pytest.fixture()
def service(mock_api, mock_auth):
    return ProjectService(mock_api, mock_auth)


@pytest.mark.asyncio
async def test_list_projects_maps_rows(service, mock_api):
    mock_api.list_projects.return_value = [_project_row(), _project_row(id="project-2")]

    projects = await service.list_projects()

    assert [p.id for p in projects] == ["project-1", "project-2"]
    assert projects[0].status == ProjectStatus.ACTIVE


@pytest.mark.asyncio
async def test_get_project_propagates_not_found(service, mock_api):
    mock_api.get_project.side_effect = NotFoundError("missing", status_code=404)

    with pytest.raises(NotFoundError):
        await service.get_project("project-404")


@pytest.mark.asyncio
async def test_create_project_uses_current_user(service, mock_api):
    await service.create_project("Alpha", description="")

    mock_api.create_project.assert_awaited_once_with(
        "Alpha", user_id="user-1", description=None
    )


@pytest.mark.asyncio
async def test_create_project_requires_user(service, mock_api, mock_auth):
    mock_auth.get_user.return_value = None

    with pytest.raises(NotAuthenticatedError, match="User not authenticated"):
        await service.create_project("Alpha")

    mock_api.create_project.assert_not_called()


@pytest.mark.asyncio
async def test_create_project_rejects_empty_name(service, mock_api):
    with pytest.raises(ValueError):
        await service.create_project("")

    mock_api.create_project.assert_not_called()
