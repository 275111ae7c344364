"""
Layered key-value storage for user preferences.

Backends are queried in priority order until one yields a valid value;
writes fan out to every backend and a failing backend never blocks the
others. The default stack mirrors what a browser offers a dashboard:

    1. LocalStorageBackend  - JSON document on disk
    2. CookieBackend        - request cookies in, Set-Cookie out
    3. CacheStorageBackend  - sqlite table, seeded with the default region
"""

import json
import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional

from ..config import PreferenceConfig, app_config
from ..exceptions import PreferenceStorageError


class PreferenceBackend(ABC):
    """Abstract key-value backend."""

    name = "backend"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class LocalStorageBackend(PreferenceBackend):
    """Preferences kept in a JSON file."""

    name = "local_storage"

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PreferenceStorageError(f"Could not read {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        tmp_path = f"{self.path}.tmp"
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PreferenceStorageError(f"Could not write {self.path}: {e}") from e


class CookieBackend(PreferenceBackend):
    """Preferences carried in HTTP cookies.

    Reads come from the incoming request's cookies; writes are recorded
    locally and emitted on the outgoing response when one is attached.
    """

    name = "cookie"

    def __init__(self, cookies: Optional[Mapping[str, str]] = None, response: Any = None,
                 max_age_days: int = 365):
        self.cookies = dict(cookies or {})
        self.response = response
        self.max_age = max_age_days * 24 * 60 * 60

    def get(self, key: str) -> Optional[str]:
        return self.cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self.cookies[key] = value
        if self.response is not None:
            self.response.set_cookie(key, value, max_age=self.max_age, path="/")


class CacheStorageBackend(PreferenceBackend):
    """Preferences in a small sqlite cache, seeded with defaults on first use."""

    name = "cache_storage"

    def __init__(self, db_path: str, defaults: Optional[Mapping[str, str]] = None):
        self.db_path = db_path
        self._initialize(defaults or {})

    def get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _initialize(self, defaults: Mapping[str, str]) -> None:
        try:
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
            conn = self.get_connection()
        except (OSError, sqlite3.Error) as e:
            raise PreferenceStorageError(f"Could not open {self.db_path}: {e}") from e
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS preferences (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            for key, value in defaults.items():
                conn.execute(
                    "INSERT OR IGNORE INTO preferences (key, value) VALUES (?, ?)", [key, value]
                )
            conn.commit()
        except sqlite3.Error as e:
            raise PreferenceStorageError(f"Could not initialize {self.db_path}: {e}") from e
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        try:
            conn = self.get_connection()
            try:
                row = conn.execute("SELECT value FROM preferences WHERE key = ?", [key]).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PreferenceStorageError(f"Could not read {key}: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            conn = self.get_connection()
            try:
                conn.execute(
                    "INSERT INTO preferences (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    [key, value],
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PreferenceStorageError(f"Could not write {key}: {e}") from e


class PreferenceStore:
    """Ordered list of backends with first-valid reads and fan-out writes."""

    def __init__(self, backends: Iterable[PreferenceBackend]):
        self.backends: List[PreferenceBackend] = list(backends)
        self.logger = logging.getLogger(__name__)

    def get(self, key: str, allowed: Optional[Iterable[str]] = None) -> Optional[str]:
        allowed = list(allowed) if allowed is not None else None
        for backend in self.backends:
            try:
                value = backend.get(key)
            except PreferenceStorageError as e:
                self.logger.warning(f"Could not read {key} from {backend.name}: {e}")
                continue
            if value is None:
                continue
            if allowed is None or value in allowed:
                return value
            self.logger.debug(f"Ignoring invalid {key}={value!r} from {backend.name}")
        return None

    def set(self, key: str, value: str) -> int:
        """Write to every backend; returns how many succeeded."""
        written = 0
        for backend in self.backends:
            try:
                backend.set(key, value)
                written += 1
            except PreferenceStorageError as e:
                self.logger.warning(f"Could not save {key} to {backend.name}: {e}")
        return written


def create_preference_store(cookies: Optional[Mapping[str, str]] = None, response: Any = None,
                            config: Optional[PreferenceConfig] = None,
                            storage_dir: Optional[str] = None) -> PreferenceStore:
    """Build the default local storage -> cookie -> cache storage stack."""
    config = config or app_config.preferences
    storage_dir = storage_dir or app_config.storage_path
    logger = logging.getLogger(__name__)

    backends: List[PreferenceBackend] = [
        LocalStorageBackend(os.path.join(storage_dir, config.local_storage_file)),
        CookieBackend(cookies, response, max_age_days=config.cookie_max_age_days),
    ]
    try:
        backends.append(CacheStorageBackend(
            os.path.join(storage_dir, config.cache_storage_file),
            defaults={"selectedRegion": config.default_region},
        ))
    except PreferenceStorageError as e:
        logger.warning(f"Cache storage unavailable, continuing without it: {e}")

    return PreferenceStore(backends)
