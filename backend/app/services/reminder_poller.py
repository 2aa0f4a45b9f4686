"""Reminder polling loop (APScheduler entrypoint).

Each poller owns its scheduler, its clock and its dedup set, so two pollers
(two owners, two tabs, two tests) never share state. The dedup set only lives
as long as one run: restarting the poller may surface a reminder again if it
was never acknowledged.
"""

import logging
import threading
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from backend.app.core.config import settings
from backend.app.services import reminder_matcher
from backend.app.services.date_resolver import TZ, local_now
from backend.app.services.notification_dispatcher import NotificationDispatcher
from backend.app.services.reminder_models import QueryFailure

_log = logging.getLogger(__name__)

class PollerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"

class ReminderPoller:
    def __init__(
        self,
        owner_id: int,
        dispatcher: NotificationDispatcher,
        interval_seconds: int | None = None,
        lookahead: timedelta | None = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.owner_id = owner_id
        self.dispatcher = dispatcher
        self.interval_seconds = interval_seconds or settings.poll_interval_seconds
        self.lookahead = lookahead or timedelta(minutes=settings.lookahead_minutes)
        self.clock = clock
        self.state = PollerState.IDLE
        self._dispatched: set[int] = set()
        self._dispatched_lock = threading.Lock()
        self._scheduler: BackgroundScheduler | None = None

    @property
    def job_id(self) -> str:
        return f"reminder_poll:{self.owner_id}"

    @property
    def dispatched_ids(self) -> frozenset[int]:
        with self._dispatched_lock:
            return frozenset(self._dispatched)

    def start(self) -> None:
        """Ask for notification permission, arm the interval timer, then tick once."""
        if self.state is PollerState.RUNNING:
            return
        with self._dispatched_lock:
            self._dispatched = set()
        self.dispatcher.system.request_permission()

        self._scheduler = BackgroundScheduler(timezone=TZ)
        # max_instances=1: a tick still running when the next one is due is skipped, not overlapped
        self._scheduler.add_job(
            func=self.tick,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=self.job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        self.state = PollerState.RUNNING
        _log.info("Reminder poller started for owner %s (every %ss)", self.owner_id, self.interval_seconds)

        try:
            self.tick()
        except Exception:
            # the interval job retries on its next run
            _log.exception("Initial reminder tick failed for owner %s", self.owner_id)

    def stop(self) -> None:
        """Cancel the timer; an in-flight tick is left to finish."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
        if self.state is PollerState.RUNNING:
            _log.info("Reminder poller stopped for owner %s", self.owner_id)
        self.state = PollerState.STOPPED

    def tick(self) -> int:
        """Dispatch every due, not-yet-shown reminder; returns how many were shown."""
        now = self.clock()
        try:
            matches = reminder_matcher.find_due(self.owner_id, now + self.lookahead)
        except QueryFailure as exc:
            _log.warning("Reminder tick aborted: %s", exc)
            return 0

        shown = 0
        for matched in matches:
            reminder = matched.reminder
            # pre-fetched but not yet due
            if reminder.fires_at > now:
                continue
            with self._dispatched_lock:
                if reminder.id in self._dispatched:
                    continue
            self.dispatcher.dispatch(matched)
            with self._dispatched_lock:
                self._dispatched.add(reminder.id)
            shown += 1
        return shown
