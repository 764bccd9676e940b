"""Shared fixtures: in-memory storage, stores with a frozen clock."""

from datetime import date
from decimal import Decimal
from typing import Any, Union

import pytest

from family_budget.audit import AuditLogger
from family_budget.exceptions import PersistenceError
from family_budget.models import Transaction, TransactionType
from family_budget.services import InMemoryStorage, PersistenceAdapter
from family_budget.stores import GoalStore, IdGenerator, LedgerStore


FROZEN_NOW = 1_760_000_000.0  # seconds since epoch
TODAY = date(2025, 10, 19)


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False
        self.write_count = 0

    def save(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise PersistenceError(f"disk unavailable while saving {key}")
        self.write_count += 1
        super().save(key, value)


def make_transaction(
    id: str,
    type: str,
    amount: Union[Decimal, float, str],
    category: str = "Другое",
    on: date = date(2025, 10, 1),
    description: str = "",
) -> Transaction:
    return Transaction(
        id=id,
        type=TransactionType(type),
        category=category,
        amount=amount,
        date=on,
        description=description,
    )


@pytest.fixture
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture
def persistence(storage) -> PersistenceAdapter:
    return PersistenceAdapter(storage)


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def ledger(persistence, audit_logger) -> LedgerStore:
    return LedgerStore(
        persistence,
        audit_logger=audit_logger,
        id_generator=IdGenerator(clock=lambda: FROZEN_NOW),
        today=lambda: TODAY,
    )


@pytest.fixture
def goal_store(persistence, audit_logger) -> GoalStore:
    return GoalStore(
        persistence,
        audit_logger=audit_logger,
        id_generator=IdGenerator(clock=lambda: FROZEN_NOW),
    )


@pytest.fixture
def scenario_transactions() -> list[Transaction]:
    return [
        make_transaction("1", "income", 85000, "Зарплата"),
        make_transaction("2", "expense", 12500, "Продукты"),
        make_transaction("3", "expense", 3200, "Транспорт"),
    ]
