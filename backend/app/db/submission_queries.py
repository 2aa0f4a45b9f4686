from datetime import datetime
from backend.app.db.conn import get_conn

def get_submission_status(announcement_id: int, owner_id: int) -> str | None:
    """Return 'pending' / 'submitted', or None when the owner has no row."""
    with get_conn() as conn:
        row = conn.execute(
            "SELECT status FROM submissions WHERE announcement_id=? AND user_id=?;",
            (announcement_id, owner_id),
        ).fetchone()
    return row["status"] if row else None

def set_submission_status(announcement_id: int, owner_id: int, status: str) -> None:
    submitted_at = datetime.now().isoformat(timespec="seconds") if status == "submitted" else None
    with get_conn() as conn:
        conn.execute(
            "INSERT INTO submissions (announcement_id, user_id, status, submitted_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(announcement_id, user_id) DO UPDATE SET status=excluded.status, submitted_at=excluded.submitted_at;",
            (announcement_id, owner_id, status, submitted_at),
        )
        conn.commit()
