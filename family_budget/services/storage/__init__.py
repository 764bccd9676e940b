"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
JSON files are the default backend; the in-memory backend serves tests
and throwaway sessions.
"""

from family_budget.services.storage.interface import CollectionStorageInterface
from family_budget.services.storage.json_file import JsonFileStorage
from family_budget.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "CollectionStorageInterface",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
