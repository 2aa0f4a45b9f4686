"""Reminder endpoints (create from preset, list, delete)."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from backend.app.db.reminder_queries import delete_reminder
from backend.app.services.reminder_service import (
    create_announcement_reminder,
    create_schedule_reminder,
    list_reminders,
)

router = APIRouter()

class NewReminder(BaseModel):
    owner_id: int
    announcement_id: int | None = None
    schedule_id: int | None = None
    preset: str = "1day"  # 1day | morning | 1hour

@router.post("/api/reminders")
def create_reminder(body: NewReminder):
    """Create a reminder for exactly one announcement or schedule entry."""
    if (body.announcement_id is None) == (body.schedule_id is None):
        raise HTTPException(status_code=400, detail="give exactly one of announcement_id / schedule_id")
    try:
        if body.announcement_id is not None:
            created = create_announcement_reminder(body.owner_id, body.announcement_id, body.preset)
        else:
            created = create_schedule_reminder(body.owner_id, body.schedule_id, body.preset)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, **created}

@router.get("/api/reminders")
def reminders_for_owner(owner_id: int, announcement_id: int | None = None):
    return {"reminders": list_reminders(owner_id, announcement_id)}

@router.delete("/api/reminders/{reminder_id}")
def remove_reminder(reminder_id: int):
    if not delete_reminder(reminder_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"ok": True}
