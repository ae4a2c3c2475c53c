import logging
import time
import uuid
from typing import Callable, List, Optional, Set

from models import Toast, ToastData, ToastOptions

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000


class Toaster:
    """Pending toasts in insertion order, with timed expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._toasts: List[Toast] = []

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    def add_toast(self, data: ToastData) -> str:
        toast_id = uuid.uuid4().hex
        self._toasts.append(Toast(id=toast_id, data=data, created_at=self._clock()))
        return toast_id

    def remove_toast(self, toast_id: str) -> None:
        # unbekannte IDs sind kein Fehler
        self._toasts = [t for t in self._toasts if t.id != toast_id]

    def expire(self, now: Optional[float] = None) -> List[Toast]:
        """Drop toasts whose duration has elapsed and return them."""
        if now is None:
            now = self._clock()

        expired, pending = [], []
        for t in self._toasts:
            duration = t.data.duration
            if duration is not None and (now - t.created_at) * 1000 >= duration:
                expired.append(t)
            else:
                pending.append(t)
        self._toasts = pending
        return expired


class NotificationQueue:
    def __init__(self, toaster: Optional[Toaster] = None, default_duration: int = DEFAULT_DURATION_MS):
        self.toaster = toaster or Toaster()
        self.default_duration = default_duration

    @property
    def toasts(self) -> List[Toast]:
        return self.toaster.toasts

    def toast(self, message: str, options: Optional[ToastOptions] = None) -> str:
        options = options or ToastOptions()
        data = ToastData(
            type=options.type,
            title=options.title,
            description=message,
            dismissible=True,
            duration=options.duration if options.duration is not None else self.default_duration,
        )
        logger.debug("Toast (%s): %s", data.type, message)
        return self.toaster.add_toast(data)

    def remove_toast(self, toast_id: str) -> None:
        self.toaster.remove_toast(toast_id)

    def success(self, message: str, title: Optional[str] = None) -> str:
        return self.toast(message, ToastOptions(type="success", title=title))

    def warning(self, message: str, title: Optional[str] = None) -> str:
        return self.toast(message, ToastOptions(type="warning", title=title))

    def error(self, message: str, title: Optional[str] = None) -> str:
        return self.toast(message, ToastOptions(type="error", title=title))


def take_unseen(toasts: List[Toast], seen: Set[str]) -> List[Toast]:
    """
    Toasts not rendered yet. Ids of toasts that are gone (expired or
    dismissed) are dropped from `seen`, new ones are added.
    """
    current = {t.id for t in toasts}
    seen.intersection_update(current)
    unseen = [t for t in toasts if t.id not in seen]
    seen.update(t.id for t in unseen)
    return unseen
