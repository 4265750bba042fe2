from __future__ import annotations

import json
import sqlite3
import threading
from collections.abc import Mapping
from pathlib import Path


class CredentialsLinkedIdStore:
    """Reverse map kept as one JSON file per linked id in the credentials dir.

    The WhatsApp Web session writes ``lid-mapping-<lid>_reverse.json`` holding
    the phone digits as a JSON string or number.
    """

    def __init__(self, credentials_dir: Path):
        self.credentials_dir = Path(credentials_dir)

    def path_for(self, linked_id: str) -> Path:
        return self.credentials_dir / f"lid-mapping-{linked_id}_reverse.json"

    def get(self, linked_id: str) -> str | None:
        try:
            raw = self.path_for(linked_id).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        value = json.loads(raw)
        if not value:
            return ""
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValueError(f"unexpected linked-id mapping value: {value!r}")
        return str(value)

    def remember(self, linked_id: str, phone_digits: str) -> None:
        self.credentials_dir.mkdir(parents=True, exist_ok=True)
        self.path_for(linked_id).write_text(json.dumps(phone_digits), encoding="utf-8")


class SQLiteLinkedIdStore:
    """Thread-safe SQLite reverse map with connection caching."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _connect(self) -> sqlite3.Connection:
        """Get or create a cached database connection (thread-safe)."""
        with self._lock:
            if self._conn is not None:
                return self._conn
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            self._conn = conn
            return conn

    def close(self) -> None:
        """Close the cached database connection."""
        with self._lock:
            if self._conn is not None:
                conn, self._conn = self._conn, None
                conn.close()

    def bootstrap(self) -> None:
        conn = self._connect()
        with self._lock:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS lid_mappings (
                    linked_id TEXT PRIMARY KEY,
                    phone TEXT NOT NULL,
                    observed_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
                );
                """
            )
            conn.commit()

    def remember(self, linked_id: str, phone_digits: str) -> None:
        conn = self._connect()
        with self._lock:
            conn.execute(
                """
                INSERT INTO lid_mappings(linked_id, phone)
                VALUES(?, ?)
                ON CONFLICT(linked_id) DO UPDATE SET phone=excluded.phone
                """,
                (linked_id, phone_digits),
            )
            conn.commit()

    def get(self, linked_id: str) -> str | None:
        conn = self._connect()
        with self._lock:
            row = conn.execute(
                "SELECT phone FROM lid_mappings WHERE linked_id = ?",
                (linked_id,),
            ).fetchone()
            if row is None:
                return None
            return str(row["phone"])


class MappingLinkedIdStore:
    """Adapter over a plain mapping, for caches and tests."""

    def __init__(self, mapping: Mapping[str, str] | None = None):
        self._mapping = dict(mapping or {})

    def get(self, linked_id: str) -> str | None:
        return self._mapping.get(linked_id)

    def remember(self, linked_id: str, phone_digits: str) -> None:
        self._mapping[linked_id] = phone_digits
