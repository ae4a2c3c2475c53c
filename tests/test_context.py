"""Tests for the application context wiring."""

from config import Settings
from context import AppContext
from database import ObservableAuthStore, RecordClient


def test_context_wires_auth_and_toasts(settings):
    records = RecordClient(settings, auth_store=ObservableAuthStore(), client=object())
    ctx = AppContext(settings=settings, records=records)

    assert ctx.auth.get_current_user() is None

    records.auth_store.save("token", {"id": "u1", "username": "gardener"})
    assert ctx.auth.get_current_user().display_name == "gardener"

    ctx.notifications.toast("hello")
    assert ctx.notifications.toasts[0].data.duration == settings.TOAST_DURATION_MS

    records.logout()
    assert ctx.auth.get_current_user() is None


def test_close_stops_mirroring(settings):
    records = RecordClient(settings, auth_store=ObservableAuthStore(), client=object())
    ctx = AppContext(settings=settings, records=records)
    ctx.close()

    records.auth_store.save("token", {"id": "u1"})

    assert ctx.auth.get_current_user() is None


def test_new_session_starts_anonymous(monkeypatch):
    monkeypatch.delenv("GARDEN_DIARY_AUTH_STORE_PATH", raising=False)
    settings = Settings(_env_file=None)
    first = AppContext(settings=settings)
    first.records.auth_store.save("alice-token", {"id": "u_alice"})

    second = AppContext(settings=settings)

    assert second.auth.get_current_user() is None
    assert second.records.auth_store.token == ""
