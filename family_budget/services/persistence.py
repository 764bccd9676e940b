"""
Persistence Adapter

Translates between the typed models and the raw key-value storage.
The stores never touch JSON; the storage backends never see a model.

Persisted layout (one logical record per key):
    transactions: [{id, type, category, amount, date, description}, ...]
    goals:        [{id, name, targetAmount, currentAmount, deadline?}, ...]
    theme:        "dark" | "light"

GUARANTEE: save_X followed by load_X returns a collection equal to the
one saved, for every valid collection including the empty one.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from family_budget.exceptions import CorruptDataError
from family_budget.models.ledger import FinancialGoal, Theme, Transaction
from family_budget.services.storage.interface import CollectionStorageInterface


TRANSACTIONS_KEY = "transactions"
GOALS_KEY = "goals"
THEME_KEY = "theme"

_transactions_adapter = TypeAdapter(list[Transaction])
_goals_adapter = TypeAdapter(list[FinancialGoal])


class PersistenceAdapter:
    """
    Load/save the three named collections.

    Load methods return None when a collection was never written,
    so callers can tell "first run" apart from "empty ledger".
    """

    def __init__(self, storage: CollectionStorageInterface):
        self._storage = storage

    @property
    def storage(self) -> CollectionStorageInterface:
        return self._storage

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def load_transactions(self) -> Optional[list[Transaction]]:
        raw = self._storage.load(TRANSACTIONS_KEY)
        if raw is None:
            return None
        try:
            return _transactions_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise CorruptDataError(f"Stored transactions are invalid: {e}") from e

    def save_transactions(self, transactions: Iterable[Transaction]) -> None:
        self._storage.save(
            TRANSACTIONS_KEY,
            _transactions_adapter.dump_python(list(transactions), mode="json"),
        )

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    def load_goals(self) -> Optional[list[FinancialGoal]]:
        raw = self._storage.load(GOALS_KEY)
        if raw is None:
            return None
        try:
            return _goals_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise CorruptDataError(f"Stored goals are invalid: {e}") from e

    def save_goals(self, goals: Iterable[FinancialGoal]) -> None:
        # deadline is optional; omit it instead of writing null
        self._storage.save(
            GOALS_KEY,
            _goals_adapter.dump_python(
                list(goals),
                mode="json",
                by_alias=True,
                exclude_none=True,
            ),
        )

    # -------------------------------------------------------------------------
    # Theme
    # -------------------------------------------------------------------------

    def load_theme(self, default: Theme = Theme.LIGHT) -> Theme:
        raw = self._storage.load(THEME_KEY)
        if raw is None:
            return default
        try:
            return Theme(raw)
        except ValueError as e:
            raise CorruptDataError(f"Stored theme is invalid: {raw!r}") from e

    def save_theme(self, theme: Theme) -> None:
        self._storage.save(THEME_KEY, Theme(theme).value)
