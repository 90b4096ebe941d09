# src/taskglyph/settings/settings_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class SettingsStore:
    """
    SQLite key-value store for settings documents.

    Each key holds one JSON document. Documents are read and written whole;
    a save is a single upsert statement, so readers see either the old or
    the new document, never a mix.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "settings.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = len(self.list_keys())
        except Exception:
            total = -1
        logger.info("SettingsStore ready db=%s keys=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def list_keys(self) -> list[str]:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT key FROM settings ORDER BY key ASC")
            return [str(row["key"]) for row in cur.fetchall()]
        finally:
            conn.close()

    def load_document(self, key: str) -> dict[str, Any] | None:
        """
        Return the stored document for `key`, or None when nothing usable is stored.

        A row that is not a JSON object is logged and treated as missing.
        """
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        try:
            val = json.loads(row["value"])
        except (TypeError, ValueError):
            logger.warning("Stored settings document is not valid JSON key=%s", key)
            return None
        if not isinstance(val, dict):
            logger.warning("Stored settings document is not an object key=%s", key)
            return None
        return val

    def save_document(self, key: str, document: dict[str, Any]) -> None:
        if not key:
            raise ValueError("key is required")
        payload = json.dumps(document, ensure_ascii=False)

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO settings(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, payload, time.time()),
            )
            conn.commit()
            logger.debug("Settings document saved key=%s bytes=%d", key, len(payload))
        finally:
            conn.close()

    def delete_document(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM settings WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
