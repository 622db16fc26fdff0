"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
import pytest_asyncio

from fakes import FakeAuthAPI, FakeBackend, FakeProjectsAPI, FakeTasksAPI, RecordingNotifier


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep backend overrides from the developer's shell out of tests."""
    monkeypatch.delenv("PROJECTDESK_BACKEND_URL", raising=False)
    monkeypatch.delenv("PROJECTDESK_BACKEND_ANON_KEY", raising=False)


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path):
    """Point the application log at a temp dir and reset the singleton."""
    import projectdesk.utils.logger as logger_mod

    log_dir = tmp_path / "logs"
    old_logger = logger_mod._logger
    logger_mod._logger = None
    app_logger = logging.getLogger("projectdesk")
    old_handlers = app_logger.handlers[:]
    app_logger.handlers = []
    with patch("projectdesk.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers = old_handlers
    logger_mod._logger = old_logger


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from projectdesk.services.config_service import ConfigService, get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    get_config_service.cache_clear()
    with patch("projectdesk.services.config_service.user_config_dir", return_value=config_dir):
        with patch("projectdesk.services.config_service.user_data_dir", return_value=data_dir):
            svc = ConfigService()
            with patch(
                "projectdesk.services.config_service.get_config_service",
                return_value=svc,
            ):
                yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------


@pytest.fixture()
def backend():
    return FakeBackend()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def auth_service(backend, tmp_config):
    from projectdesk.services.auth_service import AuthService

    return AuthService(FakeAuthAPI(backend), tmp_config)


@pytest_asyncio.fixture
async def signed_in(auth_service):
    """An AuthService with an active session for the backend's user."""
    await auth_service.sign_in_with_password("ada@example.com", "secret")
    return auth_service


@pytest.fixture()
def project_service(backend, auth_service):
    from projectdesk.services.project_service import ProjectService

    return ProjectService(FakeProjectsAPI(backend), auth_service)


@pytest.fixture()
def task_service(backend):
    from projectdesk.services.task_service import TaskService

    return TaskService(FakeTasksAPI(backend))
