import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator

from .config import Config
from .models import STATUSES


def get_conn(db_path: str | Path | None = None) -> sqlite3.Connection:
    path = Path(db_path or Config.DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def connect(db_path: str | Path | None = None) -> Iterator[sqlite3.Connection]:
    """Connection that commits on success, rolls back on error, and is always closed."""
    with closing(get_conn(db_path)) as conn, conn:
        yield conn


def init_db(db_path: str | Path | None = None) -> None:
    with connect(db_path) as conn:
        conn.execute("""
        CREATE TABLE IF NOT EXISTS projects (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            due_date TEXT NOT NULL DEFAULT ''
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS statuses (
            name TEXT PRIMARY KEY
        );
        """)
        conn.executemany(
            "INSERT OR IGNORE INTO statuses (name) VALUES (?)",
            [(s,) for s in STATUSES],
        )
        conn.execute("""
        CREATE TABLE IF NOT EXISTS occurrences (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            project_id INTEGER REFERENCES projects (id) ON DELETE SET NULL,
            name TEXT NOT NULL,
            note TEXT NOT NULL DEFAULT '',
            due_date TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL DEFAULT 'pending' REFERENCES statuses (name),
            repeat_count INTEGER NOT NULL DEFAULT 0,
            repeat_interval TEXT,
            repeat_pattern TEXT NOT NULL DEFAULT '',
            repeat_until TEXT NOT NULL DEFAULT '',
            parent_id INTEGER REFERENCES occurrences (id) ON DELETE SET NULL
        );
        """)
        conn.commit()
