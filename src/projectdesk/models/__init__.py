"""projectdesk domain and configuration models."""

from .config_models import AppConfig, BackendConfig, UIConfig
from .core import (
    Project,
    ProjectCreate,
    ProjectStatus,
    Session,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    User,
)

__all__ = [
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatus",
    "TaskPriority",
    # Auth models
    "User",
    "Session",
    # Configuration
    "AppConfig",
    "BackendConfig",
    "UIConfig",
]
