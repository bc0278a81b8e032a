"""
SQLite Object Store - local persistence with the same interface as the
hosted store.

Used when no Supabase credentials are configured, by the seeding tool, and
by the test-suite.
"""

import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from core.models import Hardware, Role, User, WaterObject
from loaders.store import (
    HARDWARE_COLUMNS, HARDWARE_ID, USER_COLUMNS, WATER_OBJECT_COLUMNS,
    ObjectStore, StoreError, pick_columns, validate_role,
)

log = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteStore(ObjectStore):
    """
    SQLite-backed store.

    Thread-safe: every call opens its own connection under a re-entrant lock.

    Usage:
        store = SQLiteStore("gidroatlas.db")
        obj = store.insert_water_object({"name": "Balkhash", "region": "Karaganda", ...})
    """

    backend = "local"
    DEFAULT_DB_PATH = "gidroatlas.db"

    def __init__(self, db_path: str = None):
        self.db_path = db_path or self.DEFAULT_DB_PATH
        self._lock = threading.RLock()
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        """Create tables and the singleton hardware row."""
        with self._lock:
            conn = self._get_connection()
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS water_objects (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL,
                        region TEXT NOT NULL,
                        resource_type TEXT NOT NULL DEFAULT 'lake',
                        water_type TEXT NOT NULL DEFAULT 'fresh',
                        fauna INTEGER NOT NULL DEFAULT 0,
                        passport_date TEXT,
                        technical_condition INTEGER,
                        latitude REAL,
                        longitude REAL,
                        pdf_url TEXT,
                        priority INTEGER,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS users (
                        id TEXT PRIMARY KEY,
                        login TEXT NOT NULL UNIQUE,
                        password_hash TEXT NOT NULL,
                        role TEXT NOT NULL DEFAULT 'guest',
                        created_at TEXT NOT NULL
                    )
                """)
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS hardware (
                        id INTEGER PRIMARY KEY,
                        humidity REAL DEFAULT 0,
                        temperature REAL DEFAULT 0,
                        remote_control INTEGER DEFAULT 0,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                conn.execute(
                    "INSERT OR IGNORE INTO hardware (id, created_at, updated_at) VALUES (?, ?, ?)",
                    (HARDWARE_ID, _now(), _now()),
                )
                conn.commit()
                log.info(f"Local store initialized at {self.db_path}")
            except sqlite3.Error as e:
                raise StoreError(f"Cannot initialize local store: {e}") from e
            finally:
                conn.close()

    def _execute(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        with self._lock:
            conn = self._get_connection()
            try:
                rows = conn.execute(sql, params).fetchall()
                conn.commit()
                return rows
            except sqlite3.Error as e:
                log.error(f"SQLite error: {e}")
                raise StoreError(str(e)) from e
            finally:
                conn.close()

    def _update(self, table: str, row_id: Any, values: Dict[str, Any], with_updated_at: bool = True) -> sqlite3.Row:
        values = dict(values)
        if with_updated_at:
            values["updated_at"] = _now()
        if values:
            assignments = ", ".join(f"{col} = ?" for col in values)
            self._execute(f"UPDATE {table} SET {assignments} WHERE id = ?", (*values.values(), row_id))
        rows = self._execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,))
        if not rows:
            raise StoreError(f"{table} row {row_id} not found")
        return rows[0]

    @staticmethod
    def _object_row(row: sqlite3.Row) -> WaterObject:
        data = dict(row)
        data["fauna"] = bool(data.get("fauna"))
        return WaterObject.from_dict(data)

    # Water objects
    def fetch_water_objects(self) -> List[WaterObject]:
        rows = self._execute("SELECT * FROM water_objects ORDER BY created_at, rowid")
        return [self._object_row(r) for r in rows]

    def insert_water_object(self, data: Dict[str, Any]) -> WaterObject:
        values = pick_columns(data, WATER_OBJECT_COLUMNS)
        if "fauna" in values:
            values["fauna"] = int(bool(values["fauna"]))
        values["id"] = str(uuid.uuid4())
        values["created_at"] = values["updated_at"] = _now()

        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        self._execute(f"INSERT INTO water_objects ({columns}) VALUES ({placeholders})", tuple(values.values()))
        log.info(f"Inserted water object {values['id']}")
        rows = self._execute("SELECT * FROM water_objects WHERE id = ?", (values["id"],))
        return self._object_row(rows[0])

    def update_water_object(self, object_id: str, payload: Dict[str, Any]) -> WaterObject:
        values = pick_columns(payload, WATER_OBJECT_COLUMNS)
        if "fauna" in values:
            values["fauna"] = int(bool(values["fauna"]))
        return self._object_row(self._update("water_objects", object_id, values))

    def delete_water_object(self, object_id: str) -> None:
        self._execute("DELETE FROM water_objects WHERE id = ?", (object_id,))
        log.info(f"Deleted water object {object_id}")

    # Users
    def fetch_users(self) -> List[User]:
        rows = self._execute("SELECT * FROM users ORDER BY created_at, rowid")
        return [User.from_dict(dict(r)) for r in rows]

    def find_user(self, login: str) -> Optional[User]:
        rows = self._execute("SELECT * FROM users WHERE login = ?", (login,))
        return User.from_dict(dict(rows[0])) if rows else None

    def insert_user(self, login: str, password_hash: str, role: str = Role.GUEST.value) -> User:
        user_id = str(uuid.uuid4())
        self._execute(
            "INSERT INTO users (id, login, password_hash, role, created_at) VALUES (?, ?, ?, ?, ?)",
            (user_id, login, password_hash, validate_role(role), _now()),
        )
        log.info(f"Created user {login}")
        return self.find_user(login)

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> User:
        values = pick_columns(payload, USER_COLUMNS)
        if "role" in values:
            values["role"] = validate_role(values["role"])
        row = self._update("users", user_id, values, with_updated_at=False)
        return User.from_dict(dict(row))

    def delete_user(self, user_id: str) -> None:
        self._execute("DELETE FROM users WHERE id = ?", (user_id,))
        log.info(f"Deleted user {user_id}")

    # Hardware
    def fetch_hardware(self) -> Hardware:
        rows = self._execute("SELECT * FROM hardware WHERE id = ?", (HARDWARE_ID,))
        if not rows:
            raise StoreError("Hardware record not found")
        return Hardware.from_dict(dict(rows[0]))

    def update_hardware(self, payload: Dict[str, Any]) -> Hardware:
        values = pick_columns(payload, HARDWARE_COLUMNS)
        return Hardware.from_dict(dict(self._update("hardware", HARDWARE_ID, values)))
