"""Services package."""

from family_budget.services.persistence import (
    GOALS_KEY,
    THEME_KEY,
    TRANSACTIONS_KEY,
    PersistenceAdapter,
)
from family_budget.services.storage import (
    CollectionStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
)

__all__ = [
    # Persistence adapter
    "GOALS_KEY",
    "THEME_KEY",
    "TRANSACTIONS_KEY",
    "PersistenceAdapter",
    # Storage backends
    "CollectionStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
]
