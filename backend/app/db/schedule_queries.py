from datetime import datetime
from backend.app.db.conn import get_conn

_SELECT_ENTRY = """
    SELECT sc.id, sc.user_id, sc.title, sc.description, sc.start_time, sc.end_time,
           sc.subject_id, s.name AS subject_name, s.color AS subject_color
    FROM schedules sc
    LEFT JOIN subjects s ON s.id = sc.subject_id
"""

def get_schedule_entry(schedule_id: int):
    with get_conn() as conn:
        return conn.execute(
            _SELECT_ENTRY + " WHERE sc.id = ?;",
            (schedule_id,),
        ).fetchone()

def list_between(owner_id: int, start_iso: str, end_iso: str):
    """Entries of `owner_id` starting in [start_iso, end_iso)."""
    with get_conn() as conn:
        return conn.execute(
            _SELECT_ENTRY + " WHERE sc.user_id = ? AND sc.start_time >= ? AND sc.start_time < ?"
            " ORDER BY sc.start_time ASC;",
            (owner_id, start_iso, end_iso),
        ).fetchall()

def add_schedule_entry(
    owner_id: int,
    title: str,
    start_iso: str,
    end_iso: str,
    description: str = "",
    subject_id: int | None = None,
) -> int:
    with get_conn() as conn:
        cur = conn.execute(
            """
            INSERT INTO schedules (user_id, subject_id, title, description, start_time, end_time, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (
                owner_id,
                subject_id,
                title,
                description,
                start_iso,
                end_iso,
                datetime.now().isoformat(timespec="seconds"),
            ),
        )
        conn.commit()
        return int(cur.lastrowid)

def delete_between(owner_id: int, start_iso: str, end_iso: str) -> int:
    """Delete entries starting in [start_iso, end_iso); returns rows removed."""
    with get_conn() as conn:
        cur = conn.execute(
            "DELETE FROM schedules WHERE user_id = ? AND start_time >= ? AND start_time < ?;",
            (owner_id, start_iso, end_iso),
        )
        conn.commit()
        return cur.rowcount
