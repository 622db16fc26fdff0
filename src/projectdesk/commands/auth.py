"""Authentication commands."""

import typer
from rich.prompt import Prompt

from projectdesk.commands.decorators import AppError, command_wrapper
from projectdesk.services.context import get_service_context
from projectdesk.utils.exit_codes import ERROR_INVALID_ARGS
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.console import get_console
from projectdesk.utils.ui.formatters import format_info, format_success

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command()
@command_wrapper
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Sign in and store the session for the TUI."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    if not email or not password:
        raise AppError("Email and password are required", ERROR_INVALID_ARGS)

    async with get_service_context() as context:
        session = await context.auth_service.sign_in_with_password(email, password)

    format_success(f"Logged in as {session.user.email or session.user.id}")


@app.command()
@command_wrapper
async def logout() -> None:
    """Sign out and discard the stored session."""
    async with get_service_context() as context:
        if not context.auth_service.is_authenticated():
            format_info("Not logged in")
            return
        await context.auth_service.sign_out()

    format_success("Logged out")


@app.command()
@command_wrapper(auth_required=True)
async def whoami() -> None:
    """Show the signed-in user."""
    async with get_service_context() as context:
        user = await context.auth_service.get_user()

    if user is None:
        format_info("Not logged in")
        return

    console.print(f"[bold]Email:[/bold] {user.email or '-'}")
    console.print(f"[bold]User ID:[/bold] {user.id}")
