"""Announcement posting (assignments, tests, general notices)."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from backend.app.db.announcement_queries import add_announcement, get_announcement
from backend.app.db.subject_queries import get_or_create_subject, get_or_create_subsubject
from backend.app.services.date_resolver import to_calendar_date
from backend.app.services.reminder_models import AnnouncementKind

router = APIRouter()

class NewAnnouncement(BaseModel):
    title: str
    type: str  # assignment | test | general_notice
    due_date: str | None = None  # YYYY-MM-DD
    description: str = ""
    subject: str | None = None
    subsubject: str | None = None

@router.post("/api/announcements")
def create_announcement(body: NewAnnouncement):
    """Post an announcement; unknown subjects are created on the fly."""
    try:
        kind = AnnouncementKind(body.type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"unknown announcement type: {body.type}")
    due_date = None
    if body.due_date:
        try:
            due_date = to_calendar_date(body.due_date).isoformat()
        except ValueError:
            raise HTTPException(status_code=400, detail=f"invalid due_date: {body.due_date}")
    if body.subsubject and not body.subject:
        raise HTTPException(status_code=400, detail="subsubject needs a subject")

    subject_id = get_or_create_subject(body.subject) if body.subject else None
    subsubject_id = get_or_create_subsubject(subject_id, body.subsubject) if body.subsubject else None
    announcement_id = add_announcement(
        body.title,
        kind.value,
        due_date=due_date,
        description=body.description,
        subject_id=subject_id,
        subsubject_id=subsubject_id,
    )
    return {"ok": True, "id": announcement_id}

@router.get("/api/announcements/{announcement_id}")
def announcement(announcement_id: int):
    row = get_announcement(announcement_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return dict(row)
