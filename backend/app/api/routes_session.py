"""Start/stop the reminder poller for the signed-in owner."""

from fastapi import APIRouter
from pydantic import BaseModel

from backend.app.services.session_service import current_poller, end_session, start_session

router = APIRouter()

class SessionBody(BaseModel):
    owner_id: int

@router.post("/api/session")
def login(body: SessionBody):
    poller = start_session(body.owner_id)
    return {"ok": True, "owner_id": poller.owner_id, "state": poller.state.value}

@router.delete("/api/session")
def logout():
    end_session()
    return {"ok": True}

@router.get("/api/session")
def session_state():
    poller = current_poller()
    if poller is None:
        return {"owner_id": None, "state": "idle"}
    return {"owner_id": poller.owner_id, "state": poller.state.value}
