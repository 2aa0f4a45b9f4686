"""Reminder creation from presets (day before / same morning / one hour before)."""

from datetime import datetime, timedelta

from backend.app.db import announcement_queries, reminder_queries, schedule_queries
from backend.app.services.date_resolver import TZ, from_storage, local_midnight, to_calendar_date, to_storage

DAY_BEFORE_HOUR = 9
MORNING_HOUR = 8

def _day_before(anchor: datetime) -> datetime:
    d = anchor.date() - timedelta(days=1)
    return datetime(d.year, d.month, d.day, DAY_BEFORE_HOUR, tzinfo=TZ)

def _same_morning(anchor: datetime) -> datetime:
    d = anchor.date()
    return datetime(d.year, d.month, d.day, MORNING_HOUR, tzinfo=TZ)

def _hour_before(anchor: datetime) -> datetime:
    return anchor - timedelta(hours=1)

REMINDER_PRESETS = {
    "1day": _day_before,
    "morning": _same_morning,
    "1hour": _hour_before,
}

def preset_fire_time(anchor: datetime, preset: str) -> datetime:
    """Fire time for `preset` relative to a local anchor instant."""
    try:
        compute = REMINDER_PRESETS[preset]
    except KeyError:
        raise ValueError(f"unknown reminder preset: {preset}") from None
    return compute(anchor.astimezone(TZ))

def create_announcement_reminder(owner_id: int, announcement_id: int, preset: str) -> dict:
    """Create a reminder for an announcement, anchored at local midnight of its due date."""
    row = announcement_queries.get_announcement(announcement_id)
    if row is None:
        raise LookupError(f"announcement {announcement_id} not found")
    if not row["due_date"]:
        raise ValueError(f"announcement {announcement_id} has no due date")
    anchor = local_midnight(to_calendar_date(row["due_date"]))
    fires_at = preset_fire_time(anchor, preset)
    reminder_id = reminder_queries.create_reminder(
        owner_id, to_storage(fires_at), announcement_id=announcement_id
    )
    return {"id": reminder_id, "fires_at": fires_at.isoformat(timespec="minutes")}

def create_schedule_reminder(owner_id: int, schedule_id: int, preset: str) -> dict:
    """Create a reminder for a schedule entry, anchored at its start time."""
    row = schedule_queries.get_schedule_entry(schedule_id)
    if row is None:
        raise LookupError(f"schedule entry {schedule_id} not found")
    fires_at = preset_fire_time(from_storage(row["start_time"]), preset)
    reminder_id = reminder_queries.create_reminder(
        owner_id, to_storage(fires_at), schedule_id=schedule_id
    )
    return {"id": reminder_id, "fires_at": fires_at.isoformat(timespec="minutes")}

def list_reminders(owner_id: int, announcement_id: int | None = None) -> list[dict]:
    if announcement_id is None:
        rows = reminder_queries.list_for_owner(owner_id)
    else:
        rows = reminder_queries.list_for_announcement(owner_id, announcement_id)
    return [
        {
            "id": r["id"],
            "announcement_id": r["announcement_id"],
            "schedule_id": r["schedule_id"],
            "fires_at": from_storage(r["remind_at"]).isoformat(timespec="minutes"),
        }
        for r in rows
    ]
