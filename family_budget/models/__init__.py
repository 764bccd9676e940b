"""
Data Models Package

This package contains all Pydantic models used in the Family Budget core.
All data flowing through the stores and analytics must conform to these schemas.
"""

from family_budget.models.ledger import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    FinancialGoal,
    GoalDraft,
    Money,
    Theme,
    Transaction,
    TransactionDraft,
    TransactionType,
    categories_for,
)
from family_budget.models.analytics import (
    AnalyticsSummary,
    CategoryShare,
    FinancialHealth,
    HealthStatus,
    MonthlyTotals,
)
from family_budget.models.results import (
    OperationResult,
    ValidationIssue,
)
from family_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "FinancialGoal",
    "GoalDraft",
    "Money",
    "Theme",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "categories_for",
    # Analytics models
    "AnalyticsSummary",
    "CategoryShare",
    "FinancialHealth",
    "HealthStatus",
    "MonthlyTotals",
    # Results
    "OperationResult",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
