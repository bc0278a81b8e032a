"""
Object Store - Persistence for water objects, users and the hardware panel.

Two backends share one interface:
- SupabaseStore: the hosted database, reached through its PostgREST API
- SQLiteStore (loaders.local_store): a local file, used offline and in tests

Every failure surfaces as StoreError.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import Settings, get_settings
from core.models import Hardware, RemoteControl, Role, User, WaterObject

log = logging.getLogger(__name__)

WATER_OBJECT_COLUMNS = (
    "name", "region", "resource_type", "water_type", "fauna", "passport_date",
    "technical_condition", "latitude", "longitude", "pdf_url", "priority",
)
USER_COLUMNS = ("login", "password_hash", "role")
HARDWARE_COLUMNS = ("humidity", "temperature", "remote_control")

HARDWARE_ID = 1


class StoreError(Exception):
    """Raised when the object store cannot complete an operation."""


def pick_columns(payload: Dict[str, Any], columns) -> Dict[str, Any]:
    """Drop keys that are not writable columns."""
    return {k: v for k, v in payload.items() if k in columns}


def validate_remote_control(value: int) -> int:
    try:
        return RemoteControl(value).value
    except ValueError:
        raise ValueError(f"remote_control must be one of 1, 0, -1 (got {value!r})")


def validate_role(role: str) -> str:
    try:
        return Role(role).value
    except ValueError:
        raise ValueError(f"Unknown role: {role!r}")


# ═══════════════════════════════════════════════════════════════════════════
# SHARED INTERFACE
# ═══════════════════════════════════════════════════════════════════════════
class ObjectStore:
    """
    Operations every backend provides.

    Subclasses implement the table primitives; the convenience methods at
    the bottom are built on them.
    """

    backend = "abstract"

    # Water objects
    def fetch_water_objects(self) -> List[WaterObject]:
        raise NotImplementedError

    def insert_water_object(self, data: Dict[str, Any]) -> WaterObject:
        raise NotImplementedError

    def update_water_object(self, object_id: str, payload: Dict[str, Any]) -> WaterObject:
        raise NotImplementedError

    def delete_water_object(self, object_id: str) -> None:
        raise NotImplementedError

    # Users
    def fetch_users(self) -> List[User]:
        raise NotImplementedError

    def find_user(self, login: str) -> Optional[User]:
        raise NotImplementedError

    def insert_user(self, login: str, password_hash: str, role: str = Role.GUEST.value) -> User:
        raise NotImplementedError

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> User:
        raise NotImplementedError

    def delete_user(self, user_id: str) -> None:
        raise NotImplementedError

    # Hardware
    def fetch_hardware(self) -> Hardware:
        raise NotImplementedError

    def update_hardware(self, payload: Dict[str, Any]) -> Hardware:
        raise NotImplementedError

    # Convenience
    def update_user_role(self, user_id: str, role: str) -> User:
        return self.update_user(user_id, {"role": validate_role(role)})

    def set_remote_control(self, value: int) -> Hardware:
        return self.update_hardware({"remote_control": validate_remote_control(value)})

    def save_priorities(self, objects: List[WaterObject]) -> int:
        """Write computed priorities back. Returns how many rows were updated."""
        updated = 0
        for obj in objects:
            self.update_water_object(obj.id, {"priority": obj.priority})
            updated += 1
        log.info(f"Saved priority for {updated} objects")
        return updated


# ═══════════════════════════════════════════════════════════════════════════
# SUPABASE BACKEND
# ═══════════════════════════════════════════════════════════════════════════
class SupabaseStore(ObjectStore):
    """
    Store backed by Supabase's REST (PostgREST) interface.

    Usage:
        store = SupabaseStore("https://xyz.supabase.co", "anon-key")
        objects = store.fetch_water_objects()
    """

    backend = "supabase"

    def __init__(self, url: str, api_key: str, timeout: float = 10.0):
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        })

    @retry(
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _send(self, method: str, table: str, params: Dict = None, json: Any = None):
        response = self.session.request(
            method,
            f"{self.base_url}/{table}",
            params=params,
            json=json,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    def _request(self, method: str, table: str, params: Dict = None, json: Any = None) -> Any:
        """Run a request and return the decoded body (None for empty bodies)."""
        try:
            response = self._send(method, table, params=params, json=json)
        except requests.HTTPError as e:
            raise StoreError(self._error_message(e)) from e
        except requests.RequestException as e:
            log.error(f"{method} {table} failed: {e}")
            raise StoreError(f"Store unreachable: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Invalid response from store for {table}") from e

    @staticmethod
    def _error_message(error: requests.HTTPError) -> str:
        response = error.response
        if response is None:
            return str(error)
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return f"API error: {response.status_code}"

    def _single(self, rows: Any, what: str) -> Dict[str, Any]:
        if isinstance(rows, list):
            if not rows:
                raise StoreError(f"{what} not found")
            return rows[0]
        if isinstance(rows, dict):
            return rows
        raise StoreError(f"{what} not found")

    # Water objects
    def fetch_water_objects(self) -> List[WaterObject]:
        rows = self._request("GET", "water_objects", params={"select": "*"}) or []
        log.info(f"Loaded {len(rows)} water objects")
        return [WaterObject.from_dict(r) for r in rows]

    def insert_water_object(self, data: Dict[str, Any]) -> WaterObject:
        rows = self._request("POST", "water_objects", json=[pick_columns(data, WATER_OBJECT_COLUMNS)])
        obj = WaterObject.from_dict(self._single(rows, "Inserted object"))
        log.info(f"Inserted water object {obj.id}")
        return obj

    def update_water_object(self, object_id: str, payload: Dict[str, Any]) -> WaterObject:
        rows = self._request(
            "PATCH", "water_objects",
            params={"id": f"eq.{object_id}"},
            json=pick_columns(payload, WATER_OBJECT_COLUMNS),
        )
        return WaterObject.from_dict(self._single(rows, f"Water object {object_id}"))

    def delete_water_object(self, object_id: str) -> None:
        self._request("DELETE", "water_objects", params={"id": f"eq.{object_id}"})
        log.info(f"Deleted water object {object_id}")

    # Users
    def fetch_users(self) -> List[User]:
        rows = self._request("GET", "users", params={"select": "*"}) or []
        return [User.from_dict(r) for r in rows]

    def find_user(self, login: str) -> Optional[User]:
        rows = self._request("GET", "users", params={"select": "*", "login": f"eq.{login}", "limit": 1}) or []
        return User.from_dict(rows[0]) if rows else None

    def insert_user(self, login: str, password_hash: str, role: str = Role.GUEST.value) -> User:
        payload = {"login": login, "password_hash": password_hash, "role": validate_role(role)}
        rows = self._request("POST", "users", json=[payload])
        user = User.from_dict(self._single(rows, "Inserted user"))
        log.info(f"Created user {user.login}")
        return user

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> User:
        rows = self._request(
            "PATCH", "users",
            params={"id": f"eq.{user_id}"},
            json=pick_columns(payload, USER_COLUMNS),
        )
        return User.from_dict(self._single(rows, f"User {user_id}"))

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", "users", params={"id": f"eq.{user_id}"})
        log.info(f"Deleted user {user_id}")

    # Hardware
    def fetch_hardware(self) -> Hardware:
        rows = self._request("GET", "hardware", params={"select": "*", "id": f"eq.{HARDWARE_ID}"})
        return Hardware.from_dict(self._single(rows, "Hardware record"))

    def update_hardware(self, payload: Dict[str, Any]) -> Hardware:
        rows = self._request(
            "PATCH", "hardware",
            params={"id": f"eq.{HARDWARE_ID}"},
            json=pick_columns(payload, HARDWARE_COLUMNS),
        )
        return Hardware.from_dict(self._single(rows, "Hardware record"))


# ═══════════════════════════════════════════════════════════════════════════
# FACTORY
# ═══════════════════════════════════════════════════════════════════════════
def create_store(settings: Settings) -> ObjectStore:
    """Build the store selected by the settings."""
    if settings.store_backend == "supabase":
        log.info("Using Supabase object store")
        return SupabaseStore(settings.supabase_url, settings.supabase_key, timeout=settings.request_timeout)

    from loaders.local_store import SQLiteStore
    if settings.store == "supabase":
        log.warning("Supabase selected but SUPABASE_URL/SUPABASE_KEY missing; using local store")
    return SQLiteStore(db_path=settings.db_path)


_store: Optional[ObjectStore] = None


def get_store() -> ObjectStore:
    """Get the singleton store for this process."""
    global _store
    if _store is None:
        _store = create_store(get_settings())
    return _store
