"""
Core Data Models for Family Budget

These models define the schemas for everything the stores own and persist:
1. Transactions (income/expense records)
2. Financial goals (savings targets)
3. Drafts (raw user input before validation)
4. Theme preference

DESIGN DECISION: Persisted models are frozen. A transaction never changes
after creation, and a goal only changes through a contribution, which
produces a new goal object. Nobody can mutate a record behind its store's back.

Goal fields are serialized with camelCase names (targetAmount, currentAmount)
so stored goals keep the same JSON layout as earlier exports.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)


# Amounts are exact Decimals in memory and plain JSON numbers on disk.
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


# =============================================================================
# ENUMS & TAXONOMY
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


class Theme(str, Enum):
    """
    UI theme preference.

    Owned by the presentation layer; it lives here only because it
    shares the persistence mechanism with the ledger.
    """
    DARK = "dark"
    LIGHT = "light"


EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Продукты",
    "Транспорт",
    "Развлечения",
    "Здоровье",
    "Образование",
    "Дом и ЖКХ",
    "Одежда",
    "Связь",
    "Другое",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Зарплата",
    "Фриланс",
    "Инвестиции",
    "Подарки",
    "Другое",
)


def categories_for(transaction_type: TransactionType) -> tuple[str, ...]:
    """Allowed categories for a transaction type."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


# =============================================================================
# PERSISTED RECORDS
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    Created only by the LedgerStore, which assigns the id.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique, creation-ordered identifier"
    )
    type: TransactionType
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name (see EXPENSE_CATEGORIES / INCOME_CATEGORIES)"
    )
    amount: Money = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount in rubles"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        max_length=500,
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class FinancialGoal(BaseModel):
    """
    A named savings target with progressive contributions.

    CRITICAL: current_amount never exceeds target_amount.
    Contributions are clamped by the GoalStore; the validator below
    rejects any record that breaks the invariant (e.g. a hand-edited file).
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(..., min_length=1)
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Goal name, e.g. 'Новый ноутбук'"
    )
    target_amount: Money = Field(
        ...,
        alias="targetAmount",
        gt=0,
        decimal_places=2,
    )
    current_amount: Money = Field(
        default=Decimal("0"),
        alias="currentAmount",
        ge=0,
        decimal_places=2,
    )
    deadline: Optional[dt.date] = None

    @model_validator(mode='after')
    def validate_progress(self) -> 'FinancialGoal':
        """current_amount must stay within [0, target_amount]."""
        if self.current_amount > self.target_amount:
            raise ValueError("Current amount cannot exceed target amount")
        return self

    @property
    def progress_percent(self) -> float:
        return float(self.current_amount / self.target_amount * 100)

    @property
    def remaining_amount(self) -> Decimal:
        return self.target_amount - self.current_amount

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount


# =============================================================================
# DRAFTS (raw user input)
# =============================================================================

def _reject_bool(value):
    """A checkbox value is not an amount, even though bool is an int."""
    if isinstance(value, bool):
        raise ValueError("Amount must be a number, not a boolean")
    return value


class TransactionDraft(BaseModel):
    """
    What the user typed into the "new transaction" form.

    Amount may still be text; the LedgerStore does the real validation
    so it can report every bad field at once.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = TransactionType.EXPENSE
    category: str = ""
    amount: Optional[Union[str, Decimal]] = None
    date: Optional[dt.date] = None
    description: str = ""

    @field_validator('date', mode='before')
    @classmethod
    def blank_date_is_none(cls, v):
        """An untouched date input arrives as an empty string."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def amount_is_not_bool(cls, v):
        return _reject_bool(v)


class GoalDraft(BaseModel):
    """What the user typed into the "new goal" form."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = ""
    target_amount: Optional[Union[str, Decimal]] = Field(
        default=None,
        alias="targetAmount",
    )
    deadline: Optional[dt.date] = None

    @field_validator('deadline', mode='before')
    @classmethod
    def blank_deadline_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('target_amount', mode='before')
    @classmethod
    def target_is_not_bool(cls, v):
        return _reject_bool(v)
