"""Application configuration (env-driven settings)."""

import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_DB_PATH = Path(__file__).resolve().parents[2] / "data" / "planner.db"

class Settings(BaseModel):
    """Defaults for the planner backend; each field can be overridden by env."""
    db_path: str = os.getenv("PLANNER_DB_PATH", str(DEFAULT_DB_PATH))
    timezone: str = os.getenv("PLANNER_TZ", "Asia/Tokyo")
    poll_interval_seconds: int = int(os.getenv("REMINDER_POLL_SECONDS", "30"))
    lookahead_minutes: int = int(os.getenv("REMINDER_LOOKAHEAD_MINUTES", "60"))
    display_window_days: int = int(os.getenv("NOTIFICATION_WINDOW_DAYS", "3"))
    # default | granted | denied
    system_notification_permission: str = os.getenv("SYSTEM_NOTIFICATIONS", "default")
    app_name: str = os.getenv("PLANNER_APP_NAME", "Class Planner")

settings = Settings()
