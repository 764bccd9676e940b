"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Swap the JSON file backend for something else later
2. Use in-memory storage for testing
3. Keep the stores decoupled from where bytes end up

The interface is intentionally tiny: one JSON-compatible value per key.
Collections are written whole; there are no partial updates.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class CollectionStorageInterface(ABC):
    """
    Abstract interface for named-collection storage.

    Values are JSON-compatible Python objects (lists, dicts, strings, numbers).
    Any implementation must round-trip them exactly.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        Load the value stored under a key.

        Args:
            key: Collection name (e.g. 'transactions')

        Returns:
            The stored value, or None if the key was never written

        Raises:
            PersistenceError: If the backend cannot be read
            CorruptDataError: If the stored text is not valid JSON
        """
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: Collection name
            value: JSON-compatible value

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Has this key ever been written?"""
        pass
