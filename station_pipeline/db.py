import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .errors import CacheError

DB_PATH = os.environ.get("STATION_CACHE_PATH", os.path.join(os.getcwd(), "station_cache.sqlite"))


def init_db(db_path: Optional[str] = None):
    path = db_path or DB_PATH
    Path(os.path.dirname(os.path.abspath(path))).mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        # Text-only key/value entries, one row per key
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        conn.commit()


@contextmanager
def get_conn(db_path: Optional[str] = None):
    path = db_path or DB_PATH
    conn = sqlite3.connect(path)
    try:
        yield conn
    finally:
        conn.close()


class SqliteStore:
    """Key-value store backed by the `kv_store` table of a local SQLite file."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or DB_PATH
        try:
            init_db(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise CacheError(f"Cannot open cache database {self.db_path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        try:
            with get_conn(self.db_path) as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key=?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise CacheError(f"Cache read failed for {key}: {exc}") from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        sql = "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value"
        try:
            with get_conn(self.db_path) as conn:
                conn.execute(sql, (key, value))
                conn.commit()
        except sqlite3.Error as exc:
            raise CacheError(f"Cache write failed for {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with get_conn(self.db_path) as conn:
                conn.execute("DELETE FROM kv_store WHERE key=?", (key,))
                conn.commit()
        except sqlite3.Error as exc:
            raise CacheError(f"Cache delete failed for {key}: {exc}") from exc
