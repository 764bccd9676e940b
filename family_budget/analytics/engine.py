"""
Analytics Engine

DESIGN DECISION: Analytics are pure functions of a transaction snapshot.
No caching, no I/O, no mutation. Each call is a linear scan, so the UI can
simply recompute everything after every change.

The snapshot is any iterable of Transaction; it is consumed once per call
and never retained.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from family_budget.models.analytics import (
    AnalyticsSummary,
    CategoryShare,
    FinancialHealth,
    HealthStatus,
    MonthlyTotals,
)
from family_budget.models.ledger import Transaction, TransactionType


ZERO = Decimal("0")
KOPECK = Decimal("0.01")

# Upper bounds of the half-open health bands, in ascending order.
# A ratio equal to a bound belongs to the NEXT band (0.5 -> GOOD).
HEALTH_BANDS: tuple[tuple[float, HealthStatus], ...] = (
    (0.5, HealthStatus.EXCELLENT),
    (0.8, HealthStatus.GOOD),
    (1.0, HealthStatus.STABLE),
)


def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    """Sum of amounts of one type; 0 for an empty snapshot."""
    transaction_type = TransactionType(transaction_type)
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        ZERO,
    )


def _totals(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    """(income, expense) in a single pass."""
    income = ZERO
    expense = ZERO
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expense += t.amount
    return income, expense


def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Total income minus total expense."""
    income, expense = _totals(transactions)
    return income - expense


def expenses_by_category(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Summed expense per category.

    Only categories with at least one expense appear. The dict iterates
    by descending amount; equal amounts keep the order in which the
    categories were first seen.
    """
    sums: dict[str, Decimal] = {}
    for t in transactions:
        if t.type == TransactionType.EXPENSE:
            sums[t.category] = sums.get(t.category, ZERO) + t.amount

    # sorted() is stable, so ties stay in first-encounter order
    ranked = sorted(sums.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked)


def top_categories(
    transactions: Iterable[Transaction],
    n: int,
) -> list[tuple[str, Decimal]]:
    """First n (category, amount) pairs of expenses_by_category()."""
    if n <= 0:
        return []
    return list(expenses_by_category(transactions).items())[:n]


def classify_ratio(ratio: Optional[float]) -> HealthStatus:
    """Map an expense/income ratio to its health band."""
    if ratio is None:
        return HealthStatus.NO_DATA
    for upper, status in HEALTH_BANDS:
        if ratio < upper:
            return status
    return HealthStatus.AT_RISK


def financial_health(transactions: Iterable[Transaction]) -> FinancialHealth:
    """
    Classify total_expense / total_income.

    No income means NO_DATA, whatever the expenses are.
    """
    income, expense = _totals(transactions)
    if income == 0:
        return FinancialHealth(status=HealthStatus.NO_DATA, ratio=None)
    ratio = float(expense / income)
    return FinancialHealth(status=classify_ratio(ratio), ratio=ratio)


def sorted_by_date(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Newest first.

    Stable: transactions on the same date keep their insertion order.
    """
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def daily_average_expense(
    transactions: Iterable[Transaction],
    period_days: int,
) -> Decimal:
    """
    Total expense divided by a caller-supplied period length,
    rounded half-up to the kopeck.

    No calendar arithmetic happens here: pass 30 for "per day this month".
    """
    if isinstance(period_days, bool) or not isinstance(period_days, int) or period_days <= 0:
        raise ValueError(f"period_days must be a positive integer, got {period_days!r}")
    average = total_by_type(transactions, TransactionType.EXPENSE) / period_days
    return average.quantize(KOPECK, rounding=ROUND_HALF_UP)


def category_shares(
    transactions: Iterable[Transaction],
    n: int,
) -> list[CategoryShare]:
    """Top n expense categories with their share of total expense (0-100)."""
    if n <= 0:
        return []
    by_category = expenses_by_category(transactions)
    total_expense = sum(by_category.values(), ZERO)
    return [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=float(amount / total_expense * 100) if total_expense > 0 else 0.0,
        )
        for category, amount in list(by_category.items())[:n]
    ]


def totals_by_month(transactions: Iterable[Transaction]) -> list[MonthlyTotals]:
    """Income and expense per calendar month (YYYY-MM), oldest month first."""
    months: dict[str, MonthlyTotals] = {}
    for t in transactions:
        key = t.date.strftime("%Y-%m")
        bucket = months.setdefault(key, MonthlyTotals(month=key))
        if t.type == TransactionType.INCOME:
            bucket.income += t.amount
        else:
            bucket.expense += t.amount
    return [months[key] for key in sorted(months)]


def build_summary(
    transactions: Iterable[Transaction],
    top_n: int = 5,
    period_days: int = 30,
) -> AnalyticsSummary:
    """Compute every dashboard figure from one snapshot."""
    snapshot = tuple(transactions)
    income, expense = _totals(snapshot)
    shares = category_shares(snapshot, top_n)

    return AnalyticsSummary(
        transaction_count=len(snapshot),
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        health=financial_health(snapshot),
        top_categories=shares,
        largest_expense_category=shares[0].category if shares else None,
        daily_average_expense=daily_average_expense(snapshot, period_days),
        period_days=period_days,
        monthly=totals_by_month(snapshot),
    )
