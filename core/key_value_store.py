# core/key_value_store.py

from __future__ import annotations

import sqlite3
from typing import Dict, Optional

from core.database import Database
from core.errors import StoreUnavailableError
from core.i_key_value_store import IKeyValueStore


class SqliteKeyValueStore(IKeyValueStore):
    """`kv_store` table of the app database."""

    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[bytes]:
        try:
            cur = self.db.get_connection().cursor()
            cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot read {key!r}: {e}") from e

        if row is None:
            return None

        value = row["value"]
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, value: bytes) -> None:
        try:
            conn = self.db.get_connection()
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, bytes(value)),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot write {key!r}: {e}") from e


class InMemoryKeyValueStore(IKeyValueStore):
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)
