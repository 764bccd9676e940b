"""Analytics package: pure derivations over a transaction snapshot."""

from family_budget.analytics.engine import (
    HEALTH_BANDS,
    balance,
    build_summary,
    category_shares,
    classify_ratio,
    daily_average_expense,
    expenses_by_category,
    financial_health,
    sorted_by_date,
    top_categories,
    total_by_type,
    totals_by_month,
)

__all__ = [
    "HEALTH_BANDS",
    "balance",
    "build_summary",
    "category_shares",
    "classify_ratio",
    "daily_average_expense",
    "expenses_by_category",
    "financial_health",
    "sorted_by_date",
    "top_categories",
    "total_by_type",
    "totals_by_month",
]
