"""Weekly schedule grid endpoints."""

from datetime import date as Date
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from backend.app.services.date_resolver import local_today, to_calendar_date
from backend.app.services.schedule_service import build_week_grid, clear_slot, save_slot

router = APIRouter()

class SlotBody(BaseModel):
    owner_id: int
    date: str  # YYYY-MM-DD
    period: int  # 1-7, 7 = after school
    title: str
    description: str = ""
    subject_id: int | None = None

def _parse_date(raw: str) -> Date:
    try:
        return to_calendar_date(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"invalid date: {raw}")

@router.get("/api/schedule/week")
def week(owner_id: int, date: str | None = None):
    anchor = _parse_date(date) if date else local_today()
    return build_week_grid(owner_id, anchor)

@router.post("/api/schedule")
def put_slot(body: SlotBody):
    day = _parse_date(body.date)
    try:
        entry_id = save_slot(body.owner_id, day, body.period, body.title, body.description, body.subject_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, "id": entry_id}

@router.delete("/api/schedule")
def delete_slot(owner_id: int, date: str, period: int):
    day = _parse_date(date)
    try:
        removed = clear_slot(owner_id, day, period)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, "removed": removed}
