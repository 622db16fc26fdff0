"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from projectdesk.errors import ProjectDeskError
from projectdesk.services.config_service import get_config_service
from projectdesk.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    exit_code_for,
    get_exit_code_name,
)
from projectdesk.utils.logger import get_logger
from projectdesk.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a stored session."""
    if get_config_service().load_session() is None:
        format_error("Not logged in. Use 'projectdesk auth login' to authenticate.")
        raise typer.Exit(ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = False):
    """Wrap a command with auth checks, async support, logging and exit codes."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger("commands")
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_auth()

                if asyncio.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                logger.info(
                    "command completed: %s (%.3fs)", cmd, time.monotonic() - start
                )
                return result

            except (AppError, ProjectDeskError) as e:
                code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s",
                    cmd,
                    time.monotonic() - start,
                    get_exit_code_name(code),
                    str(e),
                )
                format_error(str(e))
                raise typer.Exit(code=code) from e

            except typer.Exit:
                # --help, explicit exits and _require_auth
                raise

            except Exception as e:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    time.monotonic() - start,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=1) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
