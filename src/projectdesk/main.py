"""Main entry point for projectdesk."""

import typer

from projectdesk import __version__
from projectdesk.commands import auth, config
from projectdesk.commands.decorators import command_wrapper
from projectdesk.services.config_service import get_config_service
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.console import get_console
from projectdesk.utils.ui.formatters import format_warning

app = typer.Typer(
    name="projectdesk",
    cls=SuggestingGroup,
    help="Projects and tasks in your terminal, backed by a hosted database",
    invoke_without_command=True,
)

console = get_console()

app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(config.app, name="config", help="Configuration management")


@command_wrapper
def _launch_tui() -> None:
    # Imported lazily so plain CLI commands do not pay for Textual
    from projectdesk.ui.app import run_app

    run_app()


@app.callback()
def main(ctx: typer.Context) -> None:
    """Launch the TUI when no command is given."""
    if ctx.invoked_subcommand is None:
        _launch_tui()


@app.command()
def run() -> None:
    """Launch the TUI."""
    _launch_tui()


@app.command()
def version() -> None:
    """Show version information and the configured backend."""
    console.print(f"[bold]ProjectDesk[/bold] version [cyan]{__version__}[/cyan]")
    backend = get_config_service().backend
    console.print(f"Backend: [cyan]{backend.url}[/cyan]")
    if not backend.anon_key:
        format_warning(
            "No anon key configured. Set backend.anon_key or PROJECTDESK_BACKEND_ANON_KEY."
        )


if __name__ == "__main__":
    app()
