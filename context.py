from typing import Optional

from auth import AuthBridge
from config import Settings, get_settings
from database import RecordClient
from toast import NotificationQueue, Toaster


class AppContext:
    """Everything the UI needs, created once per session."""

    def __init__(self, settings: Optional[Settings] = None, records: Optional[RecordClient] = None):
        self.settings = settings or get_settings()
        self.records = records or RecordClient(self.settings)
        self.auth = AuthBridge(self.records.auth_store)
        self.notifications = NotificationQueue(Toaster(), default_duration=self.settings.TOAST_DURATION_MS)

    def close(self) -> None:
        self.auth.close()
