"""
Exit codes for projectdesk commands.

Semantic exit codes so scripts can tell what happened.
"""

from projectdesk.errors import (
    BackendError,
    FormValidationError,
    NotAuthenticatedError,
    NotFoundError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, invalid credentials, etc.)
ERROR_AUTH_FAILURE = 3

# Network or backend error (server unreachable, timeout, etc.)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(error: Exception) -> int:
    """Map an application exception to its exit code."""
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, NotAuthenticatedError):
        return ERROR_AUTH_FAILURE
    if isinstance(error, FormValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, BackendError):
        if error.status_code in (401, 403):
            return ERROR_AUTH_FAILURE
        if error.status_code is None or error.status_code >= 500:
            return ERROR_NETWORK
        return ERROR_GENERAL
    return ERROR_GENERAL
