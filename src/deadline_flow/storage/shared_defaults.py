# src/deadline_flow/storage/shared_defaults.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class SharedDefaultsStore:
    """
    SQLite stand-in for app-group shared defaults.

    One table, keyed by (suite, key). The main app writes string values,
    the widget reads them. Values are opaque strings here; decoding is
    the snapshot decoder's job.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path, suite_name: str) -> None:
        if not suite_name or not suite_name.strip():
            raise ValueError("suite_name is required")
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._suite = suite_name.strip()
        self._ensure_schema()
        logger.info("SharedDefaultsStore ready db=%s suite=%s", self._db_path, self._suite)

    @property
    def suite_name(self) -> str:
        return self._suite

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS shared_defaults (
                    suite TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (suite, key)
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _check_key(key: str) -> str:
        if not isinstance(key, str) or not key.strip():
            raise ValueError("key is required")
        return key.strip()

    # ---- public API ----

    def string_for_key(self, key: str) -> str | None:
        """Return the stored string, or None if missing or unreadable."""
        if not isinstance(key, str) or not key.strip():
            return None
        try:
            conn = self._get_conn()
        except sqlite3.Error:
            logger.exception("Shared defaults unavailable db=%s", self._db_path)
            return None
        try:
            row = conn.execute(
                "SELECT value FROM shared_defaults WHERE suite = ? AND key = ?",
                (self._suite, key.strip()),
            ).fetchone()
            return str(row["value"]) if row else None
        except sqlite3.Error:
            logger.exception("string_for_key failed suite=%s key=%s", self._suite, key)
            return None
        finally:
            conn.close()

    def set_string(self, key: str, value: str) -> None:
        key = self._check_key(key)
        if not isinstance(value, str):
            raise ValueError("value must be a string")

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO shared_defaults(suite, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(suite, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self._suite, key, value, time.time()),
            )
            conn.commit()
            logger.debug("Shared default set suite=%s key=%s len=%d", self._suite, key, len(value))
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        key = self._check_key(key)
        conn = self._get_conn()
        try:
            conn.execute(
                "DELETE FROM shared_defaults WHERE suite = ? AND key = ?",
                (self._suite, key),
            )
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT key FROM shared_defaults WHERE suite = ? ORDER BY key ASC",
                (self._suite,),
            ).fetchall()
            return [str(r["key"]) for r in rows]
        finally:
            conn.close()
