"""Signed-in user state, persisted across restarts."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from pyiottu._api.login import login
from pyiottu._constants import SESSION_STORAGE_KEY
from pyiottu._transport import Transport
from pyiottu.errors import login_error_message
from pyiottu.exceptions import IottuAuthenticationError, IottuError, IottuHttpError
from pyiottu.i18n import DEFAULT_TRANSLATOR, Translator
from pyiottu.models.user import User
from pyiottu.storage import Storage

_logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the current :class:`User` and its stored copy.

    The user is stored as JSON under ``@iottu:user`` with the server's field
    names. A missing or unreadable value means "not signed in"; it is never
    an error.
    """

    def __init__(
        self,
        storage: Storage,
        transport: Transport,
        *,
        translator: Translator = DEFAULT_TRANSLATOR,
    ) -> None:
        self._storage = storage
        self._transport = transport
        self._translator = translator
        self._user: User | None = None
        self.loaded = False

    def bind(self, transport: Transport) -> None:
        """Use ``transport`` for subsequent sign-ins (the client re-binds on every enter)."""
        self._transport = transport

    @property
    def current(self) -> User | None:
        return self._user

    @property
    def is_signed_in(self) -> bool:
        return self._user is not None

    @property
    def scope_user_id(self) -> int | None:
        """User id to scope list requests by; ``None`` for admins (and signed-out)."""
        user = self._user
        if user is None or user.role.is_privileged:
            return None
        return user.id

    async def load(self) -> User | None:
        """Restore the stored session, if any."""
        try:
            stored = await self._storage.get_item(SESSION_STORAGE_KEY)
        except OSError:
            _logger.debug("Could not read stored session", exc_info=True)
            stored = None

        self._user = None
        if stored:
            try:
                self._user = User.model_validate(json.loads(stored))
            except (ValueError, ValidationError):
                _logger.debug("Ignoring unreadable stored session")
        self.loaded = True
        return self._user

    async def sign_in(self, email: str, password: str) -> User:
        """Log in and persist the session.

        Raises
        ------
        IottuAuthenticationError
            With a localized, display-ready message. Any previously stored
            session is removed first.
        """
        try:
            user = await login(self._transport, email, password, translator=self._translator)
        except IottuError as exc:
            await self._storage.remove_item(SESSION_STORAGE_KEY)
            self._user = None
            status = exc.status_code if isinstance(exc, IottuHttpError) else None
            _logger.debug("Sign-in failed: %s", exc)
            raise IottuAuthenticationError(
                login_error_message(exc, translator=self._translator),
                status_code=status,
            ) from exc

        await self._storage.set_item(
            SESSION_STORAGE_KEY,
            json.dumps(user.model_dump(by_alias=True, mode="json")),
        )
        self._user = user
        _logger.debug("Signed in user id=%s role=%s", user.id, user.role)
        return user

    async def sign_out(self) -> None:
        await self._storage.remove_item(SESSION_STORAGE_KEY)
        self._user = None
