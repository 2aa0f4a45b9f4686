"""Find due reminders and resolve them to display payloads.

Resolution runs row by row: a reminder whose linked entity cannot be read is
logged and skipped so that one bad row never hides the rest of the batch.
Reminders for assignments the owner already submitted are dropped.
"""

import logging
import sqlite3
from datetime import datetime

from backend.app.db import announcement_queries, reminder_queries, schedule_queries, submission_queries
from backend.app.services.date_resolver import to_storage
from backend.app.services.reminder_models import (
    Announcement,
    AnnouncementKind,
    AnnouncementLink,
    MatchedReminder,
    NotificationPayload,
    QueryFailure,
    Reminder,
    ResolutionFailure,
    ScheduleEntry,
)

_log = logging.getLogger(__name__)

# kind -> (icon, title prefix, fallback body)
_ANNOUNCEMENT_TEXT = {
    AnnouncementKind.ASSIGNMENT: ("📝", "提出物リマインダー", "提出期限が近づいています"),
    AnnouncementKind.TEST: ("📖", "テストリマインダー", "テストが近づいています"),
    AnnouncementKind.GENERAL_NOTICE: ("📢", "お知らせリマインダー", "お知らせがあります"),
}
_SCHEDULE_TEXT = ("📅", "スケジュールリマインダー", "スケジュールが近づいています")

def find_due(owner_id: int, horizon: datetime) -> list[MatchedReminder]:
    """Reminders of `owner_id` firing at or before `horizon`, resolved and ordered by fire time.

    Raises QueryFailure when the reminders table itself cannot be read.
    """
    try:
        rows = reminder_queries.list_due(owner_id, to_storage(horizon))
    except (sqlite3.Error, OSError) as exc:
        raise QueryFailure(f"reminder query failed for owner {owner_id}: {exc}") from exc
    return resolve_rows(rows, owner_id)

def resolve_rows(rows, owner_id: int) -> list[MatchedReminder]:
    """Resolve reminder rows, skipping unreadable and already-submitted ones."""
    matched = []
    for row in rows:
        try:
            reminder = Reminder.from_row(row)
            result = resolve(reminder, owner_id)
        except (ResolutionFailure, ValueError, sqlite3.Error, OSError) as exc:
            _log.warning("Skipping reminder %s: %s", row["id"], exc)
            continue
        if result is not None:
            matched.append(result)
    matched.sort(key=lambda m: (m.reminder.fires_at, m.reminder.id))
    return matched

def resolve(reminder: Reminder, owner_id: int) -> MatchedReminder | None:
    """Resolve one reminder's link; None when it is suppressed by a submission."""
    if isinstance(reminder.link, AnnouncementLink):
        row = announcement_queries.get_announcement(reminder.link.announcement_id)
        if row is None:
            raise ResolutionFailure(f"announcement {reminder.link.announcement_id} not found")
        announcement = Announcement.from_row(row)
        if announcement.kind is AnnouncementKind.ASSIGNMENT:
            status = submission_queries.get_submission_status(announcement.id, owner_id)
            if status == "submitted":
                _log.debug("Reminder %s suppressed: assignment %s submitted", reminder.id, announcement.id)
                return None
        return MatchedReminder(reminder, announcement, announcement_payload(reminder.id, announcement))

    row = schedule_queries.get_schedule_entry(reminder.link.schedule_id)
    if row is None:
        raise ResolutionFailure(f"schedule entry {reminder.link.schedule_id} not found")
    entry = ScheduleEntry.from_row(row)
    return MatchedReminder(reminder, entry, schedule_payload(reminder.id, entry))

def announcement_payload(reminder_id: int, announcement: Announcement) -> NotificationPayload:
    icon, prefix, fallback = _ANNOUNCEMENT_TEXT[announcement.kind]
    subject = announcement.display_subject or announcement.title
    return NotificationPayload(
        reminder_id=reminder_id,
        title=f"{prefix}: {subject}",
        body=announcement.description or fallback,
        icon=icon,
        category=announcement.kind.value,
    )

def schedule_payload(reminder_id: int, entry: ScheduleEntry) -> NotificationPayload:
    icon, prefix, fallback = _SCHEDULE_TEXT
    return NotificationPayload(
        reminder_id=reminder_id,
        title=f"{prefix}: {entry.title}",
        body=entry.description or fallback,
        icon=icon,
        category="schedule",
    )
