from backend.app.db.conn import get_conn

def get_or_create_subject(name: str, color: str | None = None) -> int:
    """Return the id of subject `name`, inserting it if missing."""
    with get_conn() as conn:
        row = conn.execute("SELECT id FROM subjects WHERE name=?;", (name,)).fetchone()
        if row:
            return int(row["id"])
        cur = conn.execute("INSERT INTO subjects (name, color) VALUES (?, ?);", (name, color))
        conn.commit()
        return int(cur.lastrowid)

def add_subsubject(subject_id: int, name: str) -> int:
    with get_conn() as conn:
        cur = conn.execute(
            "INSERT INTO subsubjects (subject_id, name) VALUES (?, ?);",
            (subject_id, name),
        )
        conn.commit()
        return int(cur.lastrowid)

def get_or_create_subsubject(subject_id: int, name: str) -> int:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT id FROM subsubjects WHERE subject_id=? AND name=?;",
            (subject_id, name),
        ).fetchone()
    if row:
        return int(row["id"])
    return add_subsubject(subject_id, name)
