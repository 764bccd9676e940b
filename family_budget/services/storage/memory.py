"""
In-Memory Storage Implementation

Used by tests and by the "memory" backend setting (e.g. a demo session
that should not touch the disk). Values are kept as JSON text, not as
live objects, so the round-trip behaviour matches JsonFileStorage and
no caller can mutate stored data through a shared reference.
"""

import json
from typing import Any, Optional

from family_budget.exceptions import CorruptDataError, PersistenceError
from family_budget.services.storage.interface import CollectionStorageInterface


class InMemoryStorage(CollectionStorageInterface):
    """Dict-backed key-value storage."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._blobs: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def exists(self, key: str) -> bool:
        return key in self._blobs

    def load(self, key: str) -> Optional[Any]:
        blob = self._blobs.get(key)
        if blob is None:
            return None
        try:
            return json.loads(blob)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"{key} is not valid JSON: {e}") from e

    def save(self, key: str, value: Any) -> None:
        try:
            self._blobs[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize {key}: {e}") from e

    def raw(self, key: str) -> Optional[str]:
        """Stored JSON text for a key (for inspection in tests)."""
        return self._blobs.get(key)

    def put_raw(self, key: str, text: str) -> None:
        """Store text as-is, bypassing encoding."""
        self._blobs[key] = text
