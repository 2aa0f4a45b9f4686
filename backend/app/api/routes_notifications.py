"""Notification screen, in-app toasts and system notification permission."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from backend.app.services.notification_aggregator import list_within_window
from backend.app.services.reminder_models import QueryFailure
from backend.app.services.session_service import dispatcher

router = APIRouter()

class PermissionBody(BaseModel):
    permission: str  # default | granted | denied

@router.get("/api/notifications")
def notifications(owner_id: int, window_days: int | None = None):
    """Assignments/tests and schedule notices due within the display window."""
    try:
        view = list_within_window(owner_id, window_days)
    except QueryFailure as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return view.to_dict()

@router.get("/api/notifications/toasts")
def pending_toasts():
    return {"toasts": [t.to_dict() for t in dispatcher.toasts.pending()]}

@router.post("/api/notifications/toasts/{reminder_id}/ack")
def acknowledge_toast(reminder_id: int):
    """Confirm a toast; this deletes the reminder behind it."""
    if not dispatcher.toasts.acknowledge(reminder_id):
        raise HTTPException(status_code=404, detail="No pending notification for this reminder")
    return {"ok": True}

@router.post("/api/notifications/permission")
def set_permission(body: PermissionBody):
    try:
        dispatcher.system.set_permission(body.permission)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, "permission": dispatcher.system.permission}
