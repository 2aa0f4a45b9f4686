from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from backend.app.db.announcement_queries import get_announcement
from backend.app.db.submission_queries import set_submission_status

router = APIRouter()

class SubmissionBody(BaseModel):
    owner_id: int
    status: str  # pending | submitted

@router.post("/api/submissions/{announcement_id}")
def update_submission(announcement_id: int, body: SubmissionBody):
    """Mark an assignment pending/submitted; submitted ones stop producing reminders."""
    if body.status not in {"pending", "submitted"}:
        raise HTTPException(status_code=400, detail="status must be pending or submitted")
    if get_announcement(announcement_id) is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    set_submission_status(announcement_id, body.owner_id, body.status)
    return {"ok": True, "status": body.status}
