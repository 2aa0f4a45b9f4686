"""Default subjects and their display colours."""

from backend.app.db.conn import get_conn

DEFAULT_SUBJECTS = [
    ("国語",     "#FF9F9F"),
    ("数学",     "#7B9FE8"),
    ("英語",     "#FFD6A5"),
    ("外国語",   "#FFD6A5"),  # same as 英語
    ("理科",     "#A8E8D8"),
    ("社会",     "#B8A8E8"),
    ("地理歴史", "#B8A8E8"),
    ("公民",     "#B8A8E8"),
    ("保健体育", "#FFA8C8"),
    ("芸術",     "#FFB8E8"),
    ("家庭",     "#FFE8A8"),
    ("情報",     "#C8D8FF"),
]

def seed_defaults_if_empty() -> None:
    """Insert the default subjects if the table is empty."""
    with get_conn() as conn:
        n = conn.execute("SELECT COUNT(*) AS n FROM subjects;").fetchone()["n"]
        if n > 0:
            return
        conn.executemany(
            "INSERT INTO subjects (name, color) VALUES (?, ?);",
            DEFAULT_SUBJECTS,
        )
        conn.commit()
