"""Weekly schedule grid built on the period/slot mapping."""

from datetime import date as Date, timedelta

from backend.app.db import schedule_queries
from backend.app.services.date_resolver import from_storage, local_midnight, to_storage
from backend.app.services.slot_mapper import (
    PERIOD_START_HOURS,
    build_week,
    date_key,
    instant_to_period,
    slot_for_date,
    slot_label,
    week_monday,
)

def build_week_grid(owner_id: int, anchor: Date) -> dict:
    """Week header plus the owner's entries keyed by ("m/d", period)."""
    week = build_week(anchor)
    monday = week_monday(anchor)
    start = local_midnight(monday)
    end = local_midnight(monday + timedelta(days=7))
    rows = schedule_queries.list_between(owner_id, to_storage(start), to_storage(end))

    entries = []
    for r in rows:
        start_time = from_storage(r["start_time"])
        period = instant_to_period(start_time)
        entries.append({
            "id": r["id"],
            "date": date_key(start_time.date()),
            "period": period,
            "period_label": slot_label(period),
            "title": r["title"],
            "subject": r["subject_name"] or "",
            "memo": r["description"] or "",
        })

    return {
        "week": [
            {"date": d.date.isoformat(), "key": d.key, "label": d.label, "is_weekend": d.is_weekend}
            for d in week
        ],
        "periods": [
            {"period": p, "label": slot_label(p), "start_hour": h}
            for p, h in PERIOD_START_HOURS.items()
        ],
        "entries": entries,
    }

def save_slot(
    owner_id: int,
    day: Date,
    period: int,
    title: str,
    description: str = "",
    subject_id: int | None = None,
) -> int:
    """Store an entry for one grid cell, replacing whatever occupied that slot."""
    start, end = slot_for_date(day, period)
    schedule_queries.delete_between(owner_id, to_storage(start), to_storage(end))
    return schedule_queries.add_schedule_entry(
        owner_id,
        title,
        to_storage(start),
        to_storage(end),
        description=description,
        subject_id=subject_id,
    )

def clear_slot(owner_id: int, day: Date, period: int) -> int:
    start, end = slot_for_date(day, period)
    return schedule_queries.delete_between(owner_id, to_storage(start), to_storage(end))
