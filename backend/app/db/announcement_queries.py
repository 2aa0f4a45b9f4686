from datetime import datetime
from backend.app.db.conn import get_conn

def get_announcement(announcement_id: int):
    """Announcement row joined with its subject/subsubject names (or None)."""
    with get_conn() as conn:
        return conn.execute(
            """
            SELECT a.id, a.title, a.description, a.type, a.due_date,
                   s.name AS subject_name, s.color AS subject_color, ss.name AS subsubject_name
            FROM announcements a
            LEFT JOIN subjects s ON s.id = a.subject_id
            LEFT JOIN subsubjects ss ON ss.id = a.subsubject_id
            WHERE a.id = ?;
            """,
            (announcement_id,),
        ).fetchone()

def add_announcement(
    title: str,
    kind: str,
    due_date: str | None = None,
    description: str = "",
    subject_id: int | None = None,
    subsubject_id: int | None = None,
) -> int:
    with get_conn() as conn:
        cur = conn.execute(
            """
            INSERT INTO announcements (subject_id, subsubject_id, title, description, type, due_date, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (
                subject_id,
                subsubject_id,
                title,
                description,
                kind,
                due_date,
                datetime.now().isoformat(timespec="seconds"),
            ),
        )
        conn.commit()
        return int(cur.lastrowid)
