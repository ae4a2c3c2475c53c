import logging
from typing import Any, Callable, List, Optional, Protocol

from models import User

logger = logging.getLogger(__name__)

UserListener = Callable[[Optional[User]], None]


class AuthSource(Protocol):
    """What the bridge needs from an auth store (see database.ObservableAuthStore)."""

    @property
    def model(self) -> Any: ...

    def on_change(self, handler: Callable[[str, Any], None]) -> Callable[[], None]: ...


class AuthBridge:
    """
    Mirrors the signed-in user of an auth store. Every change notification
    (login, logout, token refresh) replaces the snapshot with the store's
    current record.
    """

    def __init__(self, source: AuthSource):
        self._source = source
        self._current_user: Optional[User] = User.from_record(source.model)
        self._listeners: List[UserListener] = []
        self._unsubscribe_source: Optional[Callable[[], None]] = source.on_change(self._on_auth_change)

    def _on_auth_change(self, token: str, record: Any) -> None:
        # wie im Frontend: immer den aktuellen Stand des Stores lesen
        self._current_user = User.from_record(self._source.model)
        logger.debug(
            "Auth store changed (user=%s)",
            self._current_user.id if self._current_user else None,
        )
        for handler in list(self._listeners):
            try:
                handler(self._current_user)
            except Exception:
                logger.exception("User listener %r failed", handler)

    def get_current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def subscribe(self, handler: UserListener) -> Callable[[], None]:
        self._listeners.append(handler)

        def unsubscribe() -> None:
            if handler in self._listeners:
                self._listeners.remove(handler)

        return unsubscribe

    def close(self) -> None:
        """Stop mirroring the auth store."""
        if self._unsubscribe_source is not None:
            self._unsubscribe_source()
            self._unsubscribe_source = None
        self._listeners.clear()
