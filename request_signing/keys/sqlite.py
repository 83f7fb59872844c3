"""SQLite implementation of the signature key repository."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from ..exceptions import SignatureKeyNotFoundError
from ..models import SignatureKey
from .repository import SignatureKeyRepository


class SQLiteSignatureKeyRepository(SignatureKeyRepository):
    """Persist signature keys using SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS signature_keys (
                id TEXT PRIMARY KEY,
                secret TEXT NOT NULL
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _execute(self, query: str, *params: Any) -> int:
        cur = self._conn.cursor()
        cur.execute(query, params)
        self._conn.commit()
        return cur.rowcount

    def _fetchone(self, query: str, *params: Any) -> sqlite3.Row | None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchone()

    def _fetchall(self, query: str, *params: Any) -> list[sqlite3.Row]:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchall()

    # ------------------------------------------------------------------
    # Repository API
    def add(self, key: SignatureKey) -> None:
        self._execute(
            "INSERT OR REPLACE INTO signature_keys (id, secret) VALUES (?, ?)",
            key.id,
            key.secret,
        )

    def remove(self, key_id: str) -> None:
        deleted = self._execute("DELETE FROM signature_keys WHERE id = ?", key_id)
        if not deleted:
            raise SignatureKeyNotFoundError(key_id)

    def find_one_by_id(self, key_id: str) -> SignatureKey:
        row = self._fetchone(
            "SELECT id, secret FROM signature_keys WHERE id = ?", key_id
        )
        if not row:
            raise SignatureKeyNotFoundError(key_id)
        return SignatureKey(id=row["id"], secret=row["secret"])

    def list_keys(self) -> list[SignatureKey]:
        rows = self._fetchall("SELECT id, secret FROM signature_keys ORDER BY id")
        return [SignatureKey(id=r["id"], secret=r["secret"]) for r in rows]

    def close(self) -> None:
        self._conn.close()
