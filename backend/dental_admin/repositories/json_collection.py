"""JSON encoding of stored collections.

All repositories read and write their collections through JsonCollection so
the parse/stringify rules live in one place. A collection that cannot be
parsed reads as empty (logged as a warning) instead of failing the caller.

Writes work on the raw stored entries: records a write does not target are
written back exactly as they were read, including unknown keys and entries
that are not objects.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from dental_admin.core.exceptions import StorageParseError
from dental_admin.domain.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)


def decode_document(key: str, raw: str) -> Any:
    """Parse a stored JSON value, raising StorageParseError on bad input."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageParseError(key, str(e)) from e


def encode_document(document: Any) -> str:
    return json.dumps(document, ensure_ascii=False)


def entry_has_id(entry: Any, record_id: str) -> bool:
    """True when entry is an object whose id (as text) equals record_id."""
    if not isinstance(entry, dict) or entry.get("id") is None:
        return False
    return str(entry["id"]) == record_id


def find_entry_index(entries: List[Any], record_id: str) -> Optional[int]:
    return next(
        (i for i, entry in enumerate(entries) if entry_has_id(entry, record_id)),
        None,
    )


class JsonCollection:
    """A JSON array of records stored under a single key."""

    def __init__(self, store: IKeyValueStore, key: str) -> None:
        self.store = store
        self.key = key

    def decode_entries(self) -> Optional[List[Any]]:
        """Return the stored array as-is, None when the key is absent.

        Raises:
            StorageParseError: if the value is not a JSON array
        """
        raw = self.store.get(self.key)
        if raw is None:
            return None
        document = decode_document(self.key, raw)
        if document is None:
            return None
        if not isinstance(document, list):
            raise StorageParseError(self.key, "expected a JSON array")
        return document

    def decode(self) -> Optional[List[Dict[str, Any]]]:
        """Return the stored records (objects only), None when the key is absent."""
        entries = self.decode_entries()
        if entries is None:
            return None
        return [record for record in entries if isinstance(record, dict)]

    def load_entries(self) -> List[Any]:
        """Raw stored entries for a read-modify-write; [] when unreadable."""
        try:
            return self.decode_entries() or []
        except StorageParseError as e:
            logger.warning(
                "Stored collection is unreadable; treating it as empty",
                extra={"context": {"key": self.key, "error": e.message}},
            )
            return []

    def load(self) -> List[Dict[str, Any]]:
        return [record for record in self.load_entries() if isinstance(record, dict)]

    def save(self, entries: List[Any]) -> None:
        """Replace the whole collection with a single write."""
        self.store.set(self.key, encode_document(entries))

    def exists(self) -> bool:
        return self.store.get(self.key) is not None
