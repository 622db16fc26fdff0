"""Session lifecycle: sign-in, sign-out and session-change notifications."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum

from projectdesk.errors import BackendError
from projectdesk.models.core import Session, User
from projectdesk.services.api.auth import AuthAPI
from projectdesk.services.config_service import ConfigService
from projectdesk.utils.logger import get_logger

logger = get_logger("auth")


class AuthEvent(str, Enum):
    """Kinds of session change reported to subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


AuthListener = Callable[[AuthEvent, Session | None], Awaitable[None] | None]


class Subscription:
    """Handle returned by `AuthService.on_auth_state_change`."""

    def __init__(self, service: AuthService, callback: AuthListener):
        self._service = service
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving session changes. Safe to call more than once."""
        if self.active:
            self._service._remove_listener(self)
            self.active = False


class AuthService:
    """Owns the current session and tells subscribers when it changes.

    The persisted session (via ConfigService) is the source of truth shared
    with the API client; this service keeps an in-memory copy and emits an
    event on every change.
    """

    def __init__(self, auth_api: AuthAPI, config_service: ConfigService):
        self.auth_api = auth_api
        self.config_service = config_service
        self._session: Session | None = None
        self._loaded = False
        self._subscriptions: list[Subscription] = []

        # Refreshes done transparently by the client still reach subscribers
        self.auth_api.client.on_token_refreshed = self._on_client_refresh

    @property
    def session(self) -> Session | None:
        """The last known session, without touching storage or network."""
        return self._session

    def is_authenticated(self) -> bool:
        """Whether a session is stored."""
        return self.config_service.load_session() is not None

    def on_auth_state_change(self, callback: AuthListener) -> Subscription:
        """Register *callback* for every session change until unsubscribed."""
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_listener(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def _emit(self, event: AuthEvent, session: Session | None) -> None:
        logger.info("auth event %s", event.value)
        for subscription in list(self._subscriptions):
            result = subscription.callback(event, session)
            if inspect.isawaitable(result):
                await result

    def _store(self, session: Session | None) -> None:
        self._session = session
        if session is None:
            self.config_service.clear_session()
        else:
            self.config_service.save_session(session.model_dump(mode="json"))

    async def get_session(self) -> Session | None:
        """Return the current session, restoring and refreshing it if needed.

        A stored session that has expired is refreshed once; if that fails the
        stored session is discarded and None is returned.
        """
        if self._loaded:
            return self._session

        stored = self.config_service.load_session()
        self._loaded = True
        if not stored:
            return None

        try:
            session = Session.model_validate(stored)
        except ValueError:
            logger.warning("discarding unreadable stored session")
            self._store(None)
            return None

        if not session.is_expired():
            self._session = session
            return session

        if not session.refresh_token:
            self._store(None)
            return None

        try:
            data = await self.auth_api.refresh_session(session.refresh_token)
            refreshed = Session.from_token_response(data)
        except (BackendError, KeyError, ValueError) as e:
            logger.warning("stored session could not be refreshed: %s", e)
            self._store(None)
            return None

        self._store(refreshed)
        await self._emit(AuthEvent.TOKEN_REFRESHED, refreshed)
        return refreshed

    async def _on_client_refresh(self, session: Session) -> None:
        self._session = session
        self._loaded = True
        await self._emit(AuthEvent.TOKEN_REFRESHED, session)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Sign in and broadcast SIGNED_IN.

        Raises:
            BackendError: If the credentials are rejected or the backend fails
        """
        data = await self.auth_api.sign_in_with_password(email, password)
        try:
            session = Session.from_token_response(data)
        except (KeyError, ValueError) as e:
            raise BackendError("Invalid response from server: no session received") from e

        self._store(session)
        self._loaded = True
        logger.info("signed in as %s", session.user.id)
        await self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        """Sign out locally and on the server, then broadcast SIGNED_OUT.

        A failed server-side logout (e.g. an already expired token) does not
        keep the user signed in.
        """
        if self.config_service.load_session() is not None:
            try:
                await self.auth_api.sign_out()
            except BackendError as e:
                logger.warning("server-side logout failed: %s", e)

        self._store(None)
        self._loaded = True
        await self._emit(AuthEvent.SIGNED_OUT, None)

    async def get_user(self) -> User | None:
        """Resolve the authenticated user from the backend.

        Returns:
            The user, or None if there is no session

        Raises:
            BackendError: If the backend rejects the token or fails
        """
        session = await self.get_session()
        if session is None:
            return None
        data = await self.auth_api.get_user()
        return User(**data)
