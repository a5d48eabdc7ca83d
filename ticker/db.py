from __future__ import annotations

import sqlite3
from pathlib import Path


class Database:
    """Thin SQLite key/value layer for the stopwatch's persisted blobs."""

    def __init__(self, db_path: str | Path) -> None:
        self._conn = sqlite3.connect(str(db_path))
        self._conn.row_factory = sqlite3.Row
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._conn.close()
        self._closed = True

    def initialize(self) -> None:
        # meta: one blob per well-known key (the entry log lives under a single key).
        self._conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS meta (
              key TEXT PRIMARY KEY,
              value BLOB NOT NULL
            );
            """
        )
        self._conn.commit()

    def get_meta(self, key: str) -> bytes | None:
        row = self._conn.execute("SELECT value FROM meta WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        value = row["value"]
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set_meta(self, key: str, value: bytes) -> None:
        self._conn.execute(
            """
            INSERT INTO meta (key, value)
            VALUES (?, ?)
            ON CONFLICT(key)
            DO UPDATE SET value=excluded.value
            """,
            (key, sqlite3.Binary(value)),
        )
        self._conn.commit()
