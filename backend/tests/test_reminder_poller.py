"""Tests for the reminder polling loop.

The clock is injected and the APScheduler instance is mocked, so ticks are
driven explicitly.
"""

import logging
import sqlite3
from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest

from backend.app.db.submission_queries import set_submission_status
from backend.app.services.date_resolver import TZ
from backend.app.services.reminder_poller import PollerState, ReminderPoller


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 14, 9, 1, tzinfo=TZ))


@pytest.fixture
def mock_scheduler():
    with patch("backend.app.services.reminder_poller.BackgroundScheduler") as cls:
        yield cls.return_value


class TestTick:
    def test_due_reminder_dispatched_once_per_run(self, dispatcher, clock, make_assignment, make_reminder):
        """R1: assignment due 2025-01-15, reminder at 09:00; ticks at 09:01 and 09:02."""
        r1 = make_reminder(1, datetime(2025, 1, 14, 9, 0, tzinfo=TZ), announcement_id=make_assignment("2025-01-15"))
        poller = ReminderPoller(1, dispatcher, clock=clock)

        assert poller.tick() == 1
        clock.now = datetime(2025, 1, 14, 9, 2, tzinfo=TZ)
        assert poller.tick() == 0

        assert [t.reminder_id for t in dispatcher.toasts.pending()] == [r1]
        assert poller.dispatched_ids == {r1}

    def test_many_ticks_before_ack_still_once(self, dispatcher, clock, make_assignment, make_reminder):
        make_reminder(1, clock.now - timedelta(minutes=1), announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, clock=clock)
        dispatcher.dispatch = MagicMock(wraps=dispatcher.dispatch)

        for _ in range(5):
            poller.tick()
            clock.now += timedelta(seconds=30)

        assert dispatcher.dispatch.call_count == 1

    def test_submitted_assignment_never_fires(self, dispatcher, clock, make_assignment, make_reminder):
        ann = make_assignment("2025-01-15")
        make_reminder(1, datetime(2025, 1, 14, 9, 0, tzinfo=TZ), announcement_id=ann)
        set_submission_status(ann, 1, "submitted")

        assert ReminderPoller(1, dispatcher, clock=clock).tick() == 0
        assert dispatcher.toasts.pending() == []

    def test_prefetched_reminder_waits_until_due(self, dispatcher, clock, make_assignment, make_reminder):
        rid = make_reminder(1, clock.now + timedelta(minutes=20), announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, clock=clock)

        assert poller.tick() == 0
        clock.now += timedelta(minutes=20)
        assert poller.tick() == 1
        assert poller.dispatched_ids == {rid}

    def test_dispatch_order_follows_fire_time(self, dispatcher, clock, make_assignment, make_reminder):
        ann = make_assignment()
        late = make_reminder(1, clock.now - timedelta(minutes=1), announcement_id=ann)
        early = make_reminder(1, clock.now - timedelta(minutes=30), announcement_id=ann)
        seen = []
        dispatcher.dispatch = lambda matched: seen.append(matched.reminder.id)

        ReminderPoller(1, dispatcher, clock=clock).tick()

        assert seen == [early, late]

    def test_query_failure_aborts_tick_without_raising(self, dispatcher, clock, caplog):
        poller = ReminderPoller(1, dispatcher, clock=clock)
        with patch(
            "backend.app.db.reminder_queries.list_due",
            side_effect=sqlite3.OperationalError("unable to open database file"),
        ):
            with caplog.at_level(logging.WARNING):
                assert poller.tick() == 0
        assert any("tick aborted" in r.message for r in caplog.records)

    def test_acknowledged_reminder_is_gone_from_next_tick(self, dispatcher, clock, make_assignment, make_reminder):
        rid = make_reminder(1, clock.now, announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, clock=clock)
        poller.tick()

        dispatcher.toasts.acknowledge(rid)
        clock.now += timedelta(seconds=30)

        assert poller.tick() == 0
        assert dispatcher.toasts.pending() == []

    def test_uses_lookahead_horizon(self, dispatcher, clock):
        poller = ReminderPoller(1, dispatcher, lookahead=timedelta(minutes=15), clock=clock)
        with patch("backend.app.services.reminder_matcher.find_due", return_value=[]) as find_due:
            poller.tick()
        find_due.assert_called_once_with(1, clock.now + timedelta(minutes=15))


class TestLifecycle:
    def test_start_ticks_immediately_and_schedules_interval(
        self, dispatcher, clock, mock_scheduler, make_assignment, make_reminder
    ):
        make_reminder(1, clock.now, announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, interval_seconds=30, clock=clock)
        assert poller.state is PollerState.IDLE

        poller.start()

        assert poller.state is PollerState.RUNNING
        assert len(dispatcher.toasts.pending()) == 1
        mock_scheduler.add_job.assert_called_once()
        kwargs = mock_scheduler.add_job.call_args.kwargs
        assert kwargs["func"] == poller.tick
        assert kwargs["max_instances"] == 1
        assert kwargs["id"] == "reminder_poll:1"
        assert kwargs["trigger"].interval == timedelta(seconds=30)
        mock_scheduler.start.assert_called_once()

    def test_start_requests_permission(self, clock, mock_scheduler):
        from backend.app.services.notification_dispatcher import NotificationDispatcher, SystemNotifier

        dispatcher = NotificationDispatcher(SystemNotifier(permission="default"))
        ReminderPoller(1, dispatcher, clock=clock).start()

        assert dispatcher.system.permission == "granted"

    def test_start_twice_is_noop(self, dispatcher, clock, mock_scheduler):
        poller = ReminderPoller(1, dispatcher, clock=clock)
        poller.start()
        poller.start()
        mock_scheduler.add_job.assert_called_once()

    def test_stop_cancels_timer_without_waiting(self, dispatcher, clock, mock_scheduler):
        poller = ReminderPoller(1, dispatcher, clock=clock)
        poller.start()

        poller.stop()

        mock_scheduler.shutdown.assert_called_once_with(wait=False)
        assert poller.state is PollerState.STOPPED

    def test_restart_clears_dedup_set(self, dispatcher, clock, mock_scheduler, make_assignment, make_reminder):
        """An unacknowledged reminder may surface again after a restart."""
        rid = make_reminder(1, clock.now, announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, clock=clock)
        poller.start()
        poller.stop()
        dispatcher.toasts.clear()

        poller.start()

        assert poller.dispatched_ids == {rid}
        assert [t.reminder_id for t in dispatcher.toasts.pending()] == [rid]

    def test_separate_pollers_have_separate_dedup_sets(self, dispatcher, clock, make_assignment, make_reminder):
        make_reminder(1, clock.now, announcement_id=make_assignment())
        first = ReminderPoller(1, dispatcher, clock=clock)
        second = ReminderPoller(1, dispatcher, clock=clock)

        assert first.tick() == 1
        assert second.tick() == 1


class TestUnreachableStore:
    @pytest.fixture
    def unreachable_db(self, tmp_path, monkeypatch):
        from backend.app.core.config import settings

        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        monkeypatch.setattr(settings, "db_path", str(blocker / "planner.db"))

    def test_start_survives_and_keeps_timer(self, dispatcher, clock, mock_scheduler, unreachable_db, caplog):
        poller = ReminderPoller(1, dispatcher, clock=clock)

        with caplog.at_level(logging.WARNING):
            poller.start()

        assert poller.state is PollerState.RUNNING
        mock_scheduler.add_job.assert_called_once()
        mock_scheduler.start.assert_called_once()
        assert any("tick aborted" in r.message for r in caplog.records)

    def test_tick_reports_nothing_shown(self, dispatcher, clock, unreachable_db):
        assert ReminderPoller(1, dispatcher, clock=clock).tick() == 0

    def test_unexpected_error_in_first_tick_is_logged(self, dispatcher, clock, mock_scheduler, caplog):
        poller = ReminderPoller(1, dispatcher, clock=clock)
        with patch("backend.app.services.reminder_matcher.find_due", side_effect=RuntimeError("boom")):
            with caplog.at_level(logging.ERROR):
                poller.start()

        assert poller.state is PollerState.RUNNING
        mock_scheduler.add_job.assert_called_once()
        assert any("Initial reminder tick failed" in r.message for r in caplog.records)


class TestDispatchedIds:
    def test_snapshot_is_detached_from_live_set(self, dispatcher, clock, make_assignment, make_reminder):
        first = make_reminder(1, clock.now, announcement_id=make_assignment())
        poller = ReminderPoller(1, dispatcher, clock=clock)
        poller.tick()
        snapshot = poller.dispatched_ids

        second = make_reminder(1, clock.now, announcement_id=make_assignment(title="Lab report"))
        poller.tick()

        assert snapshot == {first}
        assert poller.dispatched_ids == {first, second}
