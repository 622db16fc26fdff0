"""Credential entry form shown while signed out."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, Input, Static

from projectdesk.errors import BackendError
from projectdesk.services.auth_service import AuthService
from projectdesk.utils.logger import get_logger

logger = get_logger("ui.login")


class LoginView(Vertical):
    """Email/password sign-in.

    A successful sign-in is not handled here: the auth service broadcasts the
    new session and the application switches views.
    """

    def __init__(self, auth_service: AuthService, **kwargs):
        super().__init__(**kwargs)
        self.auth_service = auth_service
        self.submitting = False

    def compose(self) -> ComposeResult:
        yield Static("[b]Sign in to ProjectDesk[/b]", id="login-title")
        yield Input(placeholder="Email", id="login-email")
        yield Input(placeholder="Password", password=True, id="login-password")
        yield Button("Sign in", variant="primary", id="login-submit")

    def on_mount(self) -> None:
        self.query_one("#login-email", Input).focus()

    @on(Button.Pressed, "#login-submit")
    @on(Input.Submitted)
    def submit(self) -> None:
        if self.submitting:
            return
        email = self.query_one("#login-email", Input).value.strip()
        password = self.query_one("#login-password", Input).value
        if not email or not password:
            self.app.notify("Email and password are required", severity="warning")
            return
        self.run_worker(self._sign_in(email, password), exclusive=True)

    async def _sign_in(self, email: str, password: str) -> None:
        self.submitting = True
        self.query_one("#login-submit", Button).disabled = True
        try:
            await self.auth_service.sign_in_with_password(email, password)
        except BackendError as e:
            logger.warning("sign-in failed: %s", e)
            self.app.notify(str(e), title="Sign-in failed", severity="error", markup=False)
            if self.is_mounted:
                self.query_one("#login-submit", Button).disabled = False
        finally:
            self.submitting = False
