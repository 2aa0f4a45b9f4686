import sqlite3
from pathlib import Path
from backend.app.core.config import settings

def get_conn() -> sqlite3.Connection:
    Path(settings.db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(settings.db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn

def init_db() -> None:
    schema_path = Path(__file__).with_name("schema.sql")
    with get_conn() as conn:
        conn.executescript(schema_path.read_text())
        subject_columns = [r["name"] for r in conn.execute("PRAGMA table_info(subjects);")]
        if "color" not in subject_columns:
            conn.execute("ALTER TABLE subjects ADD COLUMN color TEXT;")
        announcement_columns = [r["name"] for r in conn.execute("PRAGMA table_info(announcements);")]
        if "subsubject_id" not in announcement_columns:
            conn.execute("ALTER TABLE announcements ADD COLUMN subsubject_id INTEGER;")
        submission_columns = [r["name"] for r in conn.execute("PRAGMA table_info(submissions);")]
        if "submitted_at" not in submission_columns:
            conn.execute("ALTER TABLE submissions ADD COLUMN submitted_at TEXT;")
        conn.commit()
