"""Formatting helpers shared by the CLI and the TUI."""

from datetime import date, datetime

from projectdesk.models import TaskPriority
from projectdesk.utils.ui.console import get_console


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


def format_date(value: date | datetime | None) -> str:
    """Format a date as "Oct 2, 2026". Empty string for None."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def format_completed(value: datetime | None) -> str:
    """Format a completion timestamp as "Completed Oct 3, 2026" in local time."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return f"Completed {format_date(value)}"


def priority_class(priority: TaskPriority | str) -> str:
    """CSS class of a priority badge, e.g. "priority-high"."""
    return f"priority-{TaskPriority(priority).value}"


def truncate(text: str | None, width: int = 40) -> str:
    """Collapse *text* to a single line no longer than *width*."""
    if not text:
        return ""
    line = " ".join(text.split())
    if len(line) <= width:
        return line
    return line[: max(width - 1, 0)].rstrip() + "…"
