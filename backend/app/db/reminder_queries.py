"""Reminder row CRUD helpers."""

from datetime import datetime
from backend.app.db.conn import get_conn

def list_due(owner_id: int, horizon_iso: str):
    """Reminders for `owner_id` firing at or before `horizon_iso` (UTC), oldest first."""
    with get_conn() as conn:
        return conn.execute(
            """SELECT id, user_id, announcement_id, schedule_id, remind_at
               FROM reminders
               WHERE user_id=? AND remind_at <= ?
               ORDER BY remind_at ASC, id ASC;""",
            (owner_id, horizon_iso),
        ).fetchall()

def list_for_owner(owner_id: int):
    """All live reminders of an owner ordered by fire time."""
    with get_conn() as conn:
        return conn.execute(
            """SELECT id, user_id, announcement_id, schedule_id, remind_at
               FROM reminders
               WHERE user_id=?
               ORDER BY remind_at ASC, id ASC;""",
            (owner_id,),
        ).fetchall()

def list_for_announcement(owner_id: int, announcement_id: int):
    with get_conn() as conn:
        return conn.execute(
            """SELECT id, user_id, announcement_id, schedule_id, remind_at
               FROM reminders
               WHERE user_id=? AND announcement_id=?
               ORDER BY remind_at ASC;""",
            (owner_id, announcement_id),
        ).fetchall()

def create_reminder(
    owner_id: int,
    remind_at_iso: str,
    announcement_id: int | None = None,
    schedule_id: int | None = None,
) -> int:
    """Insert a reminder linked to exactly one announcement or schedule entry."""
    if (announcement_id is None) == (schedule_id is None):
        raise ValueError("a reminder links exactly one of announcement_id / schedule_id")
    with get_conn() as conn:
        cur = conn.execute(
            """INSERT INTO reminders (user_id, announcement_id, schedule_id, remind_at, created_at)
               VALUES (?, ?, ?, ?, ?);""",
            (
                owner_id,
                announcement_id,
                schedule_id,
                remind_at_iso,
                datetime.now().isoformat(timespec="seconds"),
            ),
        )
        conn.commit()
        return int(cur.lastrowid)

def delete_reminder(reminder_id: int) -> bool:
    """Delete a reminder by id; False when no row matched."""
    with get_conn() as conn:
        cur = conn.execute("DELETE FROM reminders WHERE id=?;", (reminder_id,))
        conn.commit()
        return cur.rowcount > 0
