"""Key-value store implementations.

Every persisted collection lives under one string key as a JSON document.
The SQL store keeps one row per key in the kv_entries table; the in-memory
store backs unit tests and throwaway runs.
"""

import logging
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from dental_admin.db.base import KeyValueEntry
from dental_admin.db.session import SessionLocal
from dental_admin.domain.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)

USERS_KEY = "users"
PATIENTS_KEY = "patients"
INCIDENTS_KEY = "incidents"
AUTH_USER_KEY = "authUser"


class SqlKeyValueStore(IKeyValueStore):
    """Key-value store persisted in a SQL table through SQLAlchemy."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            db.commit()
        logger.debug(
            "Stored value",
            extra={"context": {"key": key, "length": len(value)}},
        )

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                return
            db.delete(entry)
            db.commit()
        logger.debug("Removed value", extra={"context": {"key": key}})


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed store. Values are kept as the exact strings written."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)
