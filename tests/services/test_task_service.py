"""Tests for TaskService and the status transition helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from projectdesk.models import Task, TaskPriority, TaskStatus
from projectdesk.services.task_service import TaskService, status_update, toggled_status

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)


def _task_row(**overrides) -> dict:
    row = {
        "id": "task-1",
        "title": "Write spec",
        "project_id": "project-1",
        "created_at": "2026-10-01T09:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def mock_api():
    api = MagicMock()
    api.list_tasks = AsyncMock(return_value=[])
    api.create_task = AsyncMock(return_value=_task_row())
    api.update_task = AsyncMock(return_value=_task_row())
    api.delete_task = AsyncMock(return_value=_task_row())
    return api


@pytest.fixture()
def service(mock_api):
    return TaskService(mock_api)


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (TaskStatus.TODO, TaskStatus.COMPLETED),
        (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED),
        (TaskStatus.COMPLETED, TaskStatus.TODO),
    ],
)
def test_toggled_status(current, expected):
    assert toggled_status(current) == expected


def test_status_update_completed_stamps_now():
    update = status_update(TaskStatus.COMPLETED, NOW)

    assert update.completed_at == NOW
    assert update.model_dump(mode="json", exclude_unset=True) == {
        "status": "completed",
        "completed_at": "2026-10-19T08:00:00Z",
    }


def test_status_update_todo_sends_explicit_null():
    update = status_update(TaskStatus.TODO)

    assert update.model_dump(mode="json", exclude_unset=True) == {
        "status": "todo",
        "completed_at": None,
    }


def test_status_update_defaults_to_current_time():
    before = datetime.now(UTC)
    update = status_update(TaskStatus.COMPLETED)

    assert update.completed_at >= before


@pytest.mark.asyncio
async def test_create_task_serializes_fields(service, mock_api):
    await service.create_task(
        "project-1",
        "Write spec",
        description="",
        priority=TaskPriority.HIGH,
        due_date=date(2026, 10, 2),
    )

    mock_api.create_task.assert_awaited_once_with(
        "Write spec",
        project_id="project-1",
        description=None,
        priority="high",
        due_date="2026-10-02",
    )


@pytest.mark.asyncio
async def test_create_task_rejects_empty_title(service, mock_api):
    with pytest.raises(ValueError):
        await service.create_task("project-1", "")

    mock_api.create_task.assert_not_called()


@pytest.mark.asyncio
async def test_toggle_status_writes_update(service, mock_api):
    task = Task(**_task_row(status="completed", completed_at="2026-10-03T10:00:00Z"))

    await service.toggle_status(task, now=NOW)

    mock_api.update_task.assert_awaited_once_with(
        "task-1", status="todo", completed_at=None
    )


@pytest.mark.asyncio
async def test_list_tasks_maps_rows(service, mock_api):
    mock_api.list_tasks.return_value = [_task_row(priority="low")]

    tasks = await service.list_tasks("project-1")

    assert tasks[0].priority == TaskPriority.LOW
    mock_api.list_tasks.assert_awaited_once_with("project-1")


@pytest.mark.asyncio
async def test_delete_task_delegates(service, mock_api):
    await service.delete_task("task-1")

    mock_api.delete_task.assert_awaited_once_with("task-1")
