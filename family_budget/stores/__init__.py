"""Collection stores package."""

from family_budget.stores.goals import GoalStore
from family_budget.stores.ids import IdGenerator
from family_budget.stores.ledger import LedgerStore

__all__ = ["GoalStore", "IdGenerator", "LedgerStore"]
