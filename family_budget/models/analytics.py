"""
Analytics Result Models

Display-ready aggregates produced by family_budget.analytics.
Nothing here is persisted; every value is recomputed from a snapshot.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from family_budget.models.ledger import Money


class HealthStatus(str, Enum):
    """
    Qualitative band for the expense-to-income ratio.

    Bands are half-open [lower, upper):
        [0, 0.5)   EXCELLENT
        [0.5, 0.8) GOOD
        [0.8, 1.0) STABLE
        [1.0, ...) AT_RISK
    NO_DATA is used when there is no income to compare against.
    """
    EXCELLENT = "excellent"
    GOOD = "good"
    STABLE = "stable"
    AT_RISK = "at_risk"
    NO_DATA = "no_data"

    @property
    def label(self) -> str:
        """Human-readable label ("at risk", "no data", ...)."""
        return self.value.replace("_", " ")


class FinancialHealth(BaseModel):
    """Health classification together with the ratio it was derived from."""

    status: HealthStatus
    ratio: Optional[float] = Field(
        default=None,
        description="total_expense / total_income, None when income is zero"
    )


class CategoryShare(BaseModel):
    """One row of the "top expense categories" card."""

    category: str
    amount: Money
    percentage: float = Field(
        ...,
        ge=0,
        description="Share of total expense, 0-100"
    )


class MonthlyTotals(BaseModel):
    """Income and expense for one calendar month (YYYY-MM)."""

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    income: Money = Decimal("0")
    expense: Money = Decimal("0")


class AnalyticsSummary(BaseModel):
    """Every figure the dashboard shows, derived from one snapshot."""

    transaction_count: int = Field(ge=0)
    total_income: Money = Decimal("0")
    total_expense: Money = Decimal("0")
    balance: Money = Decimal("0")
    health: FinancialHealth
    top_categories: list[CategoryShare] = Field(default_factory=list)
    largest_expense_category: Optional[str] = None
    daily_average_expense: Money = Decimal("0")
    period_days: int = Field(ge=1)
    monthly: list[MonthlyTotals] = Field(default_factory=list)
