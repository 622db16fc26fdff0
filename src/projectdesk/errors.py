"""Exceptions raised by projectdesk."""

from __future__ import annotations

import httpx


class ProjectDeskError(Exception):
    """Base class for all application errors."""


class BackendError(ProjectDeskError):
    """A request to the hosted backend failed.

    Attributes:
        message: Human-readable message, suitable for a notification
        status_code: HTTP status code, or None for network failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> BackendError:
        """Build an error from a failed backend response.

        PostgREST reports `message`, GoTrue reports `msg` or
        `error_description`; anything else falls back to the HTTP reason.
        """
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            for key in ("message", "msg", "error_description", "error"):
                if body.get(key):
                    message = str(body[key])
                    break

        if not message:
            message = response.reason_phrase or f"HTTP {response.status_code}"

        if response.status_code == 404:
            return NotFoundError(message, status_code=404)
        return cls(message, status_code=response.status_code)


class NotFoundError(BackendError):
    """The requested row does not exist (or is not visible to this user)."""


class NotAuthenticatedError(ProjectDeskError):
    """An operation needs an authenticated user and there is none."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class FormValidationError(ProjectDeskError):
    """A form failed client-side validation before any network call."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
