"""Shared fixtures: a throwaway SQLite database and quiet notification channels."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from backend.app.core.config import settings
from backend.app.db.announcement_queries import add_announcement
from backend.app.db.conn import init_db
from backend.app.db.reminder_queries import create_reminder
from backend.app.db.schedule_queries import add_schedule_entry
from backend.app.services.date_resolver import to_storage
from backend.app.services.notification_dispatcher import NotificationDispatcher, SystemNotifier, ToastBoard
from backend.app.services.slot_mapper import PERIOD_LENGTH


@pytest.fixture(autouse=True)
def db(tmp_path, monkeypatch):
    """Point the app at a fresh database file for every test."""
    monkeypatch.setattr(settings, "db_path", str(tmp_path / "planner.db"))
    init_db()
    return settings.db_path


@pytest.fixture(autouse=True)
def desktop_notifications(monkeypatch):
    """Never pop real desktop notifications from tests."""
    fake = MagicMock()
    monkeypatch.setattr("backend.app.services.notification_dispatcher.notification", fake)
    return fake


@pytest.fixture
def dispatcher():
    return NotificationDispatcher(SystemNotifier(permission="denied"), ToastBoard())


@pytest.fixture
def make_assignment():
    def _make(due_date="2025-01-15", kind="assignment", title="Essay", description="Write 800 words"):
        return add_announcement(title, kind, due_date=due_date, description=description)
    return _make


@pytest.fixture
def make_reminder():
    def _make(owner_id, fires_at, announcement_id=None, schedule_id=None):
        return create_reminder(
            owner_id, to_storage(fires_at), announcement_id=announcement_id, schedule_id=schedule_id
        )
    return _make


@pytest.fixture
def make_schedule_entry():
    def _make(owner_id, start, title="Club meeting", description=""):
        return add_schedule_entry(
            owner_id, title, to_storage(start), to_storage(start + PERIOD_LENGTH), description=description
        )
    return _make


@pytest.fixture
def insert_dangling_reminder(db):
    """Insert a reminder whose announcement does not exist (bypasses FK checks)."""
    def _insert(owner_id, fires_at, announcement_id=9999):
        conn = sqlite3.connect(db)
        try:
            cur = conn.execute(
                "INSERT INTO reminders (user_id, announcement_id, schedule_id, remind_at, created_at) "
                "VALUES (?, ?, NULL, ?, '2025-01-01T00:00:00');",
                (owner_id, announcement_id, to_storage(fires_at)),
            )
            conn.commit()
            return cur.lastrowid
        finally:
            conn.close()
    return _insert
