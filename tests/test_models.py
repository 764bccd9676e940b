"""
Tests for Family Budget models

Test strategy:
1. Unit tests for models, validators and analytics (pure, no storage)
2. Store tests against in-memory storage
3. File backend tests in a pytest tmp_path (never the real data dir)
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from family_budget.exceptions import NotFoundError, ValidationError
from family_budget.models import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    FinancialGoal,
    GoalDraft,
    OperationResult,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    categories_for,
)
from family_budget.stores.validation import parse_amount


class TestTransactionModel:
    """Tests for the persisted Transaction model."""

    def test_transaction_creation(self):
        transaction = Transaction(
            id="1",
            type=TransactionType.INCOME,
            category="Зарплата",
            amount=85000,
            date=date(2025, 10, 1),
            description="Зарплата за октябрь",
        )
        assert transaction.is_income
        assert not transaction.is_expense
        assert transaction.amount == Decimal("85000")

    def test_transaction_rejects_non_positive_amount(self):
        with pytest.raises(PydanticValidationError):
            Transaction(id="1", type="expense", category="Связь", amount=0, date=date(2025, 1, 1))

    def test_transaction_rejects_empty_category(self):
        with pytest.raises(PydanticValidationError):
            Transaction(id="1", type="expense", category="  ", amount=10, date=date(2025, 1, 1))

    def test_transaction_is_frozen(self):
        transaction = Transaction(id="1", type="expense", category="Связь", amount=10, date=date(2025, 1, 1))
        with pytest.raises(PydanticValidationError):
            transaction.amount = 20

    def test_description_defaults_to_empty(self):
        transaction = Transaction(id="1", type="expense", category="Связь", amount=10, date=date(2025, 1, 1))
        assert transaction.description == ""

    def test_amount_allows_at_most_two_decimal_places(self):
        with pytest.raises(PydanticValidationError):
            Transaction(id="1", type="expense", category="Связь", amount="10.005", date=date(2025, 1, 1))

    def test_amount_dumps_as_json_number(self):
        transaction = Transaction(id="1", type="expense", category="Связь", amount="12500.75", date=date(2025, 1, 1))
        assert transaction.model_dump()["amount"] == Decimal("12500.75")
        assert transaction.model_dump(mode="json")["amount"] == 12500.75


class TestGoalModel:
    """Tests for FinancialGoal."""

    def test_goal_progress_properties(self):
        goal = FinancialGoal(id="1", name="Отпуск", target_amount=120000, current_amount=48000)
        assert goal.progress_percent == pytest.approx(40.0)
        assert goal.remaining_amount == 72000
        assert goal.is_completed is False

    def test_goal_accepts_camel_case(self):
        goal = FinancialGoal.model_validate({"id": "1", "name": "X", "targetAmount": 10, "currentAmount": 10})
        assert goal.is_completed is True

    def test_goal_current_cannot_exceed_target(self):
        with pytest.raises(ValueError, match="Current amount cannot exceed target amount"):
            FinancialGoal(id="1", name="X", target_amount=100, current_amount=101)

    def test_goal_rejects_negative_current(self):
        with pytest.raises(ValueError):
            FinancialGoal(id="1", name="X", target_amount=100, current_amount=-1)


class TestDrafts:
    """Drafts hold raw form input."""

    def test_transaction_draft_defaults(self):
        draft = TransactionDraft()
        assert draft.type == TransactionType.EXPENSE
        assert draft.category == ""
        assert draft.amount is None
        assert draft.date is None

    def test_transaction_draft_strips_whitespace(self):
        draft = TransactionDraft(category="  Продукты  ")
        assert draft.category == "Продукты"

    def test_goal_draft_blank_deadline(self):
        assert GoalDraft(name="X", deadline="").deadline is None

    def test_transaction_draft_rejects_boolean_amount(self):
        with pytest.raises(PydanticValidationError):
            TransactionDraft(category="Продукты", amount=True)

    def test_goal_draft_rejects_boolean_target(self):
        with pytest.raises(PydanticValidationError):
            GoalDraft.model_validate({"name": "X", "targetAmount": False})

    def test_numeric_draft_amount_becomes_decimal(self):
        assert TransactionDraft(amount=0.1).amount == Decimal("0.1")
        assert TransactionDraft(amount="12 500").amount == "12 500"


class TestCategories:

    def test_categories_for_type(self):
        assert categories_for(TransactionType.EXPENSE) == EXPENSE_CATEGORIES
        assert categories_for("income") == INCOME_CATEGORIES

    def test_other_is_shared(self):
        assert "Другое" in EXPENSE_CATEGORIES
        assert "Другое" in INCOME_CATEGORIES


class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        ("12500", 12500.0),
        ("12 500", 12500.0),
        ("12 500,5", 12500.5),
        (3200, 3200.0),
        (0.5, 0.5),
        (0.1, Decimal("0.1")),
        (Decimal("7.25"), Decimal("7.25")),
        ("-10", -10.0),
    ])
    def test_parses(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", True, "nan", float("inf"), [1]])
    def test_rejects(self, raw):
        assert parse_amount(raw) is None


class TestExceptions:

    def test_validation_error_lists_fields(self):
        error = ValidationError([
            ValidationIssue(field="category", issue_type="missing", message="Category is required"),
            ValidationIssue(field="amount", issue_type="invalid_value", message="Amount must be greater than zero"),
        ])
        assert error.fields == ["category", "amount"]
        assert "category: Category is required" in str(error)
        assert isinstance(error, ValueError)

    def test_not_found_error(self):
        error = NotFoundError("goal", "42")
        assert str(error) == "goal not found: 42"
        assert isinstance(error, LookupError)


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description="Test transaction added",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.transaction_added("17", "expense", "Продукты", Decimal("12500"))
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_added"
        assert log_dict["entity_id"] == "17"
        assert log_dict["details"]["category"] == "Продукты"
        assert log_dict["details"]["amount"] == "12500"

    def test_builder_goal_contributed_not_completed(self):
        event = AuditEventBuilder.goal_contributed(
            "1", Decimal("1000"), Decimal("1000"), Decimal("36000"), Decimal("80000"),
        )
        assert event.event_type == AuditEventType.GOAL_CONTRIBUTED
        assert event.details["clamped"] is False

    def test_builder_goal_completed_only_when_target_is_reached(self):
        reached = AuditEventBuilder.goal_contributed(
            "1", Decimal("5000"), Decimal("5000"), Decimal("80000"), Decimal("80000"),
        )
        already_full = AuditEventBuilder.goal_contributed(
            "1", Decimal("5000"), Decimal("0"), Decimal("80000"), Decimal("80000"),
        )
        assert reached.event_type == AuditEventType.GOAL_COMPLETED
        assert already_full.event_type == AuditEventType.GOAL_CONTRIBUTED

    def test_builder_persistence_failed_is_error(self):
        event = AuditEventBuilder.persistence_failed("goals", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


class TestOperationResult:

    def test_ok(self):
        result = OperationResult.ok("delete_transaction", True)
        assert result.success
        assert not result.has_errors
        assert result.out_of_sync is False

    def test_failed(self):
        result = OperationResult.failed(
            "add_goal",
            error_type="validation",
            error_message="name: Goal name is required",
        )
        assert result.has_errors
        assert result.issues == []

    def test_rejects_unknown_error_type(self):
        with pytest.raises(PydanticValidationError):
            OperationResult.failed("x", error_type="boom", error_message="?")
