"""ProjectDesk Textual application.

The app only renders: session phase, project list and selection live in
`AppStore`, and every pane subscribes to the store that feeds it.
"""

import asyncio

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Footer, LoadingIndicator, Static

from projectdesk.services.context import ServiceContext, get_service_context
from projectdesk.state import AppPhase, AppStore, ProjectDetailState, ProjectListState
from projectdesk.ui.login import LoginView
from projectdesk.ui.notifier import TextualNotifier
from projectdesk.ui.project_detail import Placeholder, ProjectDetailPane
from projectdesk.ui.project_list import ProjectListPane
from projectdesk.utils.logger import get_logger

logger = get_logger("ui")


class MainView(Horizontal):
    """Authenticated layout: project list on the left, detail on the right."""

    app: "ProjectDeskApp"

    def __init__(self, store: AppStore, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self._unsubscribe = None
        self._shown_project_id: str | None = None
        self._refresh_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        state = ProjectListState(
            self.app.context.project_service,
            self.app.notifier,
            on_select=self.store.select_project,
            on_projects_change=self.store.refresh_projects,
        )
        yield ProjectListPane(self.store, state, id="project-pane")
        yield Container(Placeholder(), id="detail-pane")

    def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._schedule_refresh)
        self.call_later(self.refresh_detail)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _schedule_refresh(self) -> None:
        if self.is_mounted:
            self.call_later(self.refresh_detail)

    async def refresh_detail(self) -> None:
        # Refreshes queue behind each other so one pane is mounted at a time
        async with self._refresh_lock:
            project_id = self.store.selected_project_id
            if project_id == self._shown_project_id:
                return
            self._shown_project_id = project_id

            pane = self.query_one("#detail-pane", Container)
            await pane.remove_children()
            if project_id is None:
                await pane.mount(Placeholder())
                return

            state = ProjectDetailState(
                project_id,
                self.app.context.project_service,
                self.app.context.task_service,
                self.app.notifier,
                on_project_missing=self.store.handle_missing_project,
            )
            await pane.mount(ProjectDetailPane(state))


class ProjectDeskApp(App):
    """Projects and tasks against the hosted backend."""

    TITLE = "ProjectDesk"
    CSS_PATH = "app.tcss"
    BINDINGS = [
        ("ctrl+t", "toggle_theme", "Toggle theme"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, context: ServiceContext):
        super().__init__()
        self.context = context
        self.notifier = TextualNotifier(self)
        self.store = AppStore(context.auth_service, context.project_service)
        self._rendered_phase: AppPhase | None = None
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="nav-bar"):
            yield Static(f"[b]{self.TITLE}[/b]", id="nav-title")
            yield Static("", id="nav-user", markup=False)
            yield Button("Sign out", id="sign-out")
        yield Container(LoadingIndicator(), id="body")
        yield Footer()

    async def on_mount(self) -> None:
        self.theme = self.context.config_service.config.ui.theme
        self.query_one("#nav-bar").display = False
        self._unsubscribe = self.store.subscribe(self._schedule_refresh)
        self.run_worker(self.store.start(), exclusive=True, group="session")

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.store.stop()
        await self.context.close()

    def _schedule_refresh(self) -> None:
        self.call_later(self.refresh_phase)

    async def refresh_phase(self) -> None:
        phase = self.store.phase
        session = self.store.session
        nav_user = self.query_one("#nav-user", Static)
        nav_user.update((session.user.email or "") if session else "")
        self.query_one("#nav-bar").display = phase == AppPhase.AUTHENTICATED

        if phase == self._rendered_phase:
            return
        self._rendered_phase = phase
        logger.debug("rendering phase %s", phase.value)

        body = self.query_one("#body", Container)
        await body.remove_children()
        if phase == AppPhase.LOADING:
            await body.mount(LoadingIndicator())
        elif phase == AppPhase.UNAUTHENTICATED:
            await body.mount(LoginView(self.context.auth_service, id="login"))
        else:
            await body.mount(MainView(self.store, id="main"))

    def action_toggle_theme(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    @on(Button.Pressed, "#sign-out")
    def sign_out(self) -> None:
        self.run_worker(self.store.sign_out(), group="session")


def run_app(context: ServiceContext | None = None) -> None:
    """Run the TUI until the user quits."""
    app = ProjectDeskApp(context or get_service_context())
    app.run()
