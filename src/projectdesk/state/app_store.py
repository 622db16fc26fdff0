"""Top-level application state: session phase, project list and selection."""

from __future__ import annotations

from enum import Enum

from projectdesk.errors import BackendError
from projectdesk.models import Project, Session
from projectdesk.services.auth_service import AuthEvent, AuthService, Subscription
from projectdesk.services.project_service import ProjectService
from projectdesk.state.events import Observable
from projectdesk.utils.logger import get_logger

logger = get_logger("state.app")


class AppPhase(str, Enum):
    """Coarse phases of the application, driven by the session."""

    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class AppStore(Observable):
    """Root store.

    `start()` subscribes to session changes and resolves the initial
    session; `stop()` unsubscribes. Entering the authenticated phase fetches
    the project list; leaving it discards projects and the selection.
    """

    def __init__(self, auth_service: AuthService, project_service: ProjectService):
        super().__init__()
        self.auth_service = auth_service
        self.project_service = project_service

        self.phase = AppPhase.LOADING
        self.session: Session | None = None
        self.projects: list[Project] = []
        self.selected_project_id: str | None = None

        self._subscription: Subscription | None = None

    async def start(self) -> None:
        """Subscribe to the auth service and resolve the current session."""
        if self._subscription is None:
            self._subscription = self.auth_service.on_auth_state_change(
                self._on_auth_change
            )
        session = await self.auth_service.get_session()
        await self._set_session(session)

    def stop(self) -> None:
        """Unsubscribe from the auth service."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_auth_change(self, event: AuthEvent, session: Session | None) -> None:
        logger.debug("session change: %s", event.value)
        await self._set_session(session)

    async def _set_session(self, session: Session | None) -> None:
        previous = self.session
        self.session = session

        if session is None:
            self.phase = AppPhase.UNAUTHENTICATED
            self.projects = []
            self.selected_project_id = None
            self.changed()
            return

        self.phase = AppPhase.AUTHENTICATED
        user_changed = previous is None or previous.user.id != session.user.id
        if user_changed:
            self.projects = []
            self.selected_project_id = None
        self.changed()

        if user_changed:
            await self.refresh_projects()

    async def refresh_projects(self) -> None:
        """Re-fetch the project list.

        Failures are logged only; the previous list stays on screen.
        """
        try:
            projects = await self.project_service.list_projects()
        except BackendError as e:
            logger.error("Error fetching projects: %s", e)
            return

        self.projects = projects
        self.changed()

    @property
    def selected_project(self) -> Project | None:
        for project in self.projects:
            if project.id == self.selected_project_id:
                return project
        return None

    def select_project(self, project_id: str) -> None:
        """Select a project. No network effect."""
        if project_id != self.selected_project_id:
            self.selected_project_id = project_id
            self.changed()

    def clear_selection(self) -> None:
        if self.selected_project_id is not None:
            self.selected_project_id = None
            self.changed()

    async def handle_missing_project(self, project_id: str) -> None:
        """Drop a selection whose project no longer exists, then re-sync."""
        if self.selected_project_id == project_id:
            logger.info("selected project %s no longer exists", project_id)
            self.clear_selection()
        await self.refresh_projects()

    async def sign_out(self) -> None:
        """Sign out; the session subscription moves the store to the gate."""
        await self.auth_service.sign_out()
