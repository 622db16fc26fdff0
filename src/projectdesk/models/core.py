"""Domain models for projects, tasks and sessions.

Rows are owned and validated by the hosted backend; these models only hold
transient, re-fetched copies.
"""

from __future__ import annotations

import time
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    """Lifecycle status of a project (defaulted server-side)."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TaskStatus(str, Enum):
    """Status of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Priority tier of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class User(BaseModel):
    """Authenticated principal as reported by the auth service.

    Attributes:
        id: Unique identifier of the user
        email: Email address, if the provider exposes one
    """

    id: str
    email: str | None = None


class Session(BaseModel):
    """An active login for a user.

    Attributes:
        access_token: Bearer token sent with every data request
        refresh_token: Token used to obtain a new access token
        token_type: Token scheme, normally "bearer"
        expires_at: Expiry as a unix timestamp, if known
        user: The authenticated user
    """

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_at: int | None = None
    user: User

    @classmethod
    def from_token_response(cls, data: dict) -> Session:
        """Build a session from a token endpoint response."""
        expires_at = data.get("expires_at")
        if expires_at is None and data.get("expires_in") is not None:
            expires_at = int(time.time()) + int(data["expires_in"])
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type", "bearer"),
            expires_at=expires_at,
            user=User(**data["user"]),
        )

    def is_expired(self, margin: int = 10) -> bool:
        """Whether the access token expires within *margin* seconds."""
        if self.expires_at is None:
            return False
        return self.expires_at - margin <= time.time()


class Project(BaseModel):
    """Project row.

    Attributes:
        id: Server-generated identifier
        name: Project name
        description: Optional free-text description
        created_at: Server creation timestamp
        user_id: Owner of the project
        status: active, completed or archived
    """

    id: str
    name: str
    description: str | None = None
    created_at: datetime
    user_id: str
    status: ProjectStatus = ProjectStatus.ACTIVE


class ProjectCreate(BaseModel):
    """Payload for inserting a project. Status is left to the server."""

    name: str = Field(min_length=1)
    description: str | None = None
    user_id: str


class Task(BaseModel):
    """Task row.

    Attributes:
        id: Server-generated identifier
        title: Short title
        description: Optional details
        status: todo, in_progress or completed
        priority: low, medium or high
        due_date: Optional due date
        project_id: Owning project
        assigned_to: Optional user reference (unused by the UI)
        created_at: Server creation timestamp
        completed_at: Set exactly when status is completed
    """

    id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    project_id: str
    assigned_to: str | None = None
    created_at: datetime
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskCreate(BaseModel):
    """Payload for inserting a task."""

    title: str = Field(min_length=1)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    project_id: str


class TaskUpdate(BaseModel):
    """Partial task update.

    Only explicitly set fields are sent, so `completed_at=None` is written
    as a null rather than dropped.
    """

    status: TaskStatus | None = None
    completed_at: datetime | None = None
