"""Notification screen view: reminders whose target date is coming up soon."""

import sqlite3
from dataclasses import dataclass, field
from datetime import date as Date, datetime

from backend.app.core.config import settings
from backend.app.db import reminder_queries
from backend.app.services import reminder_matcher
from backend.app.services.date_resolver import days_until, format_human, local_today
from backend.app.services.reminder_models import (
    Announcement,
    AnnouncementKind,
    QueryFailure,
    ScheduleEntry,
)
from backend.app.services.urgency import classify, days_label, is_immediate, within_window

DEFAULT_SUBJECT_COLOR = "#7B9FE8"
DEFAULT_SCHEDULE_COLOR = "#A8D8E8"
SCHEDULE_CATEGORY = "スケジュール"

@dataclass
class NotificationView:
    assignments_and_tests: list[dict] = field(default_factory=list)
    schedule_notices: list[dict] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.assignments_and_tests) + len(self.schedule_notices)

    def to_dict(self) -> dict:
        return {
            "assignments_and_tests": self.assignments_and_tests,
            "schedule_notices": self.schedule_notices,
            "total_count": self.total_count,
        }

def list_within_window(owner_id: int, window_days: int | None = None, today: Date | None = None) -> NotificationView:
    """Collect the owner's reminders whose due date / start date is within `window_days`.

    Read-only: nothing is dispatched or deleted.
    """
    if window_days is None:
        window_days = settings.display_window_days
    if today is None:
        today = local_today()
    try:
        rows = reminder_queries.list_for_owner(owner_id)
    except (sqlite3.Error, OSError) as exc:
        raise QueryFailure(f"reminder listing failed for owner {owner_id}: {exc}") from exc

    view = NotificationView()
    for matched in reminder_matcher.resolve_rows(rows, owner_id):
        entity = matched.entity
        if isinstance(entity, Announcement):
            item = _announcement_item(matched.reminder.id, entity, today, window_days)
            if item is not None:
                view.assignments_and_tests.append(item)
        elif isinstance(entity, ScheduleEntry):
            item = _schedule_item(matched.reminder.id, entity, today, window_days)
            if item is not None:
                view.schedule_notices.append(item)

    view.assignments_and_tests.sort(key=lambda i: (i["due_date"], i["reminder_id"]))
    view.schedule_notices.sort(key=lambda i: (i["start_time"], i["reminder_id"]))
    return view

def _announcement_item(reminder_id: int, announcement: Announcement, today: Date, window_days: int) -> dict | None:
    if announcement.kind not in (AnnouncementKind.ASSIGNMENT, AnnouncementKind.TEST):
        return None
    if announcement.due_date is None:
        return None
    remaining = days_until(announcement.due_date, today)
    if not within_window(remaining, window_days):
        return None
    return {
        "id": announcement.id,
        "reminder_id": reminder_id,
        "type": announcement.kind.value,
        "subject": announcement.display_subject,
        "subject_color": announcement.subject_color or DEFAULT_SUBJECT_COLOR,
        "title": announcement.title,
        "description": announcement.description,
        "due_date": announcement.due_date.isoformat(),
        "due_date_label": format_human(announcement.due_date),
        "days_until": remaining,
        "days_label": days_label(remaining),
        "urgency": classify(remaining).value,
        "is_urgent": is_immediate(remaining),
    }

def _schedule_item(reminder_id: int, entry: ScheduleEntry, today: Date, window_days: int) -> dict | None:
    start_date = entry.start_time.date()
    if not within_window(days_until(start_date, today), window_days):
        return None
    return {
        "id": entry.id,
        "reminder_id": reminder_id,
        "title": entry.title,
        "content": entry.description,
        "category": SCHEDULE_CATEGORY,
        "category_color": entry.subject_color or DEFAULT_SCHEDULE_COLOR,
        "start_time": _iso(entry.start_time),
        "date_label": format_human(start_date),
    }

def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="minutes")
