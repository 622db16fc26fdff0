"""Configuration management commands."""

import json

import typer
from pydantic import ValidationError

from projectdesk.commands.decorators import AppError, command_wrapper
from projectdesk.services.config_service import get_config_service
from projectdesk.utils.exit_codes import ERROR_INVALID_ARGS
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.console import get_console
from projectdesk.utils.ui.formatters import format_error, format_success

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config() -> None:
    """View current configuration."""
    config = get_config_service().config
    console.print_json(json.dumps(config.model_dump(mode="json")))


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., backend.url)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS)
    if hasattr(value, "model_dump"):
        console.print_json(json.dumps(value.model_dump(mode="json")))
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., backend.url)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    except ValidationError as e:
        message = e.errors()[0]["msg"] if e.errors() else str(e)
        raise AppError(f"Invalid value for '{key}': {message}", ERROR_INVALID_ARGS) from e

    format_success(f"Configuration '{key}' set to '{get_config_service().get(key)}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
