"""Owner session lifecycle: one reminder poller per signed-in owner."""

import logging
import threading

from backend.app.services.notification_dispatcher import NotificationDispatcher
from backend.app.services.reminder_poller import ReminderPoller

_log = logging.getLogger(__name__)

dispatcher = NotificationDispatcher()
_lock = threading.Lock()
_poller: ReminderPoller | None = None

def start_session(owner_id: int) -> ReminderPoller:
    """Start polling for `owner_id`; a different owner replaces the current poller."""
    global _poller
    with _lock:
        if _poller is not None and _poller.owner_id == owner_id:
            _poller.start()
            return _poller
        if _poller is not None:
            _poller.stop()
            dispatcher.toasts.clear()
        _poller = ReminderPoller(owner_id, dispatcher)
        _poller.start()
        return _poller

def end_session() -> None:
    """Stop the current poller (logout, shutdown)."""
    global _poller
    with _lock:
        if _poller is None:
            return
        _poller.stop()
        dispatcher.toasts.clear()
        _log.info("Session ended for owner %s", _poller.owner_id)
        _poller = None

def current_poller() -> ReminderPoller | None:
    return _poller
