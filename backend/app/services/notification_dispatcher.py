"""Dual-channel reminder delivery: desktop notification + in-app toast.

The desktop channel is permission-gated and best effort. The toast channel
always works and carries the single confirm action; confirming deletes the
reminder row.
"""

import logging
import sqlite3
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from plyer import notification

from backend.app.core.config import settings
from backend.app.db import reminder_queries
from backend.app.services.date_resolver import local_now
from backend.app.services.reminder_models import MatchedReminder, NotificationPayload

_log = logging.getLogger(__name__)

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"
PERMISSION_STATES = {PERMISSION_DEFAULT, PERMISSION_GRANTED, PERMISSION_DENIED}

CONFIRM_LABEL = "確認"
SYSTEM_TIMEOUT_SECONDS = 10

class SystemNotifier:
    """Desktop notifications through plyer, gated by a tri-state permission."""

    def __init__(self, permission: str | None = None, app_name: str | None = None):
        permission = permission or settings.system_notification_permission
        if permission not in PERMISSION_STATES:
            raise ValueError(f"unknown notification permission: {permission}")
        self.permission = permission
        self.app_name = app_name or settings.app_name

    def request_permission(self) -> str:
        """Resolve an undecided permission; decided states are left alone.

        A desktop process has no prompt to show, so "default" becomes
        "granted". Deployments that want toast-only delivery set "denied".
        """
        if self.permission == PERMISSION_DEFAULT:
            self.permission = PERMISSION_GRANTED
            _log.info("System notifications enabled")
        return self.permission

    def set_permission(self, permission: str) -> None:
        if permission not in PERMISSION_STATES:
            raise ValueError(f"unknown notification permission: {permission}")
        self.permission = permission

    def notify(self, payload: NotificationPayload) -> bool:
        """Show a desktop notification; False when skipped or it failed."""
        if self.permission != PERMISSION_GRANTED:
            return False
        try:
            notification.notify(
                title=payload.title,
                message=payload.body,
                app_name=self.app_name,
                timeout=SYSTEM_TIMEOUT_SECONDS,
            )
        except Exception as exc:
            # No usable backend on this host: fall back to toasts for the rest of the run.
            _log.warning("System notification failed, disabling channel: %s", exc)
            self.permission = PERMISSION_DENIED
            return False
        return True

@dataclass
class Toast:
    reminder_id: int
    title: str
    body: str
    icon: str
    category: str
    created_at: datetime
    action_label: str = CONFIRM_LABEL
    on_action: Callable[[], None] | None = field(default=None, repr=False)

    def to_dict(self) -> dict:
        return {
            "reminder_id": self.reminder_id,
            "title": self.title,
            "body": self.body,
            "icon": self.icon,
            "category": self.category,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "action_label": self.action_label,
        }

class ToastBoard:
    """In-app toasts that stay up until the user confirms them."""

    def __init__(self):
        self._lock = threading.Lock()
        self._toasts: dict[int, Toast] = {}

    def push(self, payload: NotificationPayload, on_action: Callable[[], None]) -> Toast:
        toast = Toast(
            reminder_id=payload.reminder_id,
            title=payload.title,
            body=payload.body,
            icon=payload.icon,
            category=payload.category,
            created_at=local_now(),
            on_action=on_action,
        )
        with self._lock:
            self._toasts[payload.reminder_id] = toast
        return toast

    def pending(self) -> list[Toast]:
        with self._lock:
            return sorted(self._toasts.values(), key=lambda t: (t.created_at, t.reminder_id))

    def acknowledge(self, reminder_id: int) -> bool:
        """Remove the toast and run its action once; False if there was none."""
        with self._lock:
            toast = self._toasts.pop(reminder_id, None)
        if toast is None:
            return False
        if toast.on_action is not None:
            toast.on_action()
        return True

    def clear(self) -> None:
        with self._lock:
            self._toasts.clear()

class NotificationDispatcher:
    def __init__(self, system: SystemNotifier | None = None, toasts: ToastBoard | None = None):
        self.system = system or SystemNotifier()
        self.toasts = toasts or ToastBoard()

    def show(self, payload: NotificationPayload, on_acknowledge: Callable[[], None]) -> None:
        """Emit both channels for one payload."""
        self.system.notify(payload)
        self.toasts.push(payload, on_acknowledge)

    def dispatch(self, matched: MatchedReminder) -> None:
        reminder_id = matched.reminder.id
        _log.info(
            "[REMINDER] id=%s | fires_at=%s | %s",
            reminder_id,
            matched.reminder.fires_at.isoformat(timespec="minutes"),
            matched.payload.title,
        )
        self.show(matched.payload, lambda: self.acknowledge(reminder_id))

    def acknowledge(self, reminder_id: int) -> bool:
        """Delete the acknowledged reminder. Failures are logged, never retried."""
        try:
            deleted = reminder_queries.delete_reminder(reminder_id)
        except sqlite3.Error:
            _log.warning("Could not delete acknowledged reminder %s", reminder_id, exc_info=True)
            return False
        if not deleted:
            _log.info("Acknowledged reminder %s was already gone", reminder_id)
        return deleted
