import logging

from fastapi import FastAPI
from backend.app.core.config import settings
from backend.app.db.conn import init_db
from backend.app.db.subject_seed import seed_defaults_if_empty
from backend.app.services.session_service import end_session
from backend.app.api.routes_session import router as session_router
from backend.app.api.routes_reminders import router as reminders_router
from backend.app.api.routes_notifications import router as notifications_router
from backend.app.api.routes_schedule import router as schedule_router
from backend.app.api.routes_submissions import router as submissions_router
from backend.app.api.routes_announcements import router as announcements_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
app = FastAPI(title=settings.app_name)
_log = logging.getLogger(__name__)

@app.on_event("startup")
def _startup():
    init_db()
    seed_defaults_if_empty()
    _log.info("Database ready at %s (tz=%s)", settings.db_path, settings.timezone)

@app.on_event("shutdown")
def _shutdown():
    end_session()

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(session_router)
app.include_router(reminders_router)
app.include_router(notifications_router)
app.include_router(schedule_router)
app.include_router(submissions_router)
app.include_router(announcements_router)
