"""
Draft Validation

Checks run by the stores BEFORE any mutation. Each check returns a list
of ValidationIssue; an empty list means the draft can be applied.

IMPORTANT: Validation never silently fixes input. Amount text is parsed
(so "12 500,50" from a form works) but an unparseable, non-positive or
sub-kopeck amount is reported, never rounded or coerced to something else.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from family_budget.models.ledger import (
    GoalDraft,
    TransactionDraft,
    categories_for,
)
from family_budget.models.results import ValidationIssue


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse user input into a finite Decimal.

    Accepts numbers and numeric text; spaces (including non-breaking
    ones used as thousands separators) are dropped and a decimal comma
    is accepted. Floats go through str() so 0.1 stays 0.1.
    Returns None when the value is not a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = "".join(value.split()).replace(",", ".")
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def check_positive_amount(value: Any, field: str) -> tuple[Optional[Decimal], list[ValidationIssue]]:
    """Parse an amount and require it to be > 0 with at most two decimal places."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None, [ValidationIssue(
            field=field,
            issue_type="missing",
            message="Amount is required",
            suggested_fix="Enter an amount greater than zero",
        )]

    amount = parse_amount(value)
    if amount is None:
        return None, [ValidationIssue(
            field=field,
            issue_type="invalid_format",
            message=f"Amount is not a number: {value!r}",
            suggested_fix="Use digits only, e.g. 12500 or 12500.50",
        )]
    if amount <= 0:
        return None, [ValidationIssue(
            field=field,
            issue_type="invalid_value",
            message="Amount must be greater than zero",
        )]
    if amount.normalize().as_tuple().exponent < -2:
        return None, [ValidationIssue(
            field=field,
            issue_type="invalid_value",
            message="Amount cannot be split finer than one kopeck",
            suggested_fix="Use at most two decimal places",
        )]
    return amount, []


def validate_transaction_draft(
    draft: TransactionDraft,
    enforce_taxonomy: bool = False,
) -> tuple[Optional[Decimal], list[ValidationIssue]]:
    """
    Validate a new-transaction draft.

    Returns: (parsed_amount, issues)
    """
    issues = []

    if not draft.category:
        issues.append(ValidationIssue(
            field="category",
            issue_type="missing",
            message="Category is required",
            suggested_fix="Pick a category from the list",
        ))
    elif enforce_taxonomy and draft.category not in categories_for(draft.type):
        issues.append(ValidationIssue(
            field="category",
            issue_type="not_allowed",
            message=f"'{draft.category}' is not a valid {draft.type.value} category",
            suggested_fix=", ".join(categories_for(draft.type)),
        ))

    amount, amount_issues = check_positive_amount(draft.amount, "amount")
    issues.extend(amount_issues)

    return amount, issues


def validate_goal_draft(draft: GoalDraft) -> tuple[Optional[Decimal], list[ValidationIssue]]:
    """
    Validate a new-goal draft.

    Returns: (parsed_target_amount, issues)
    """
    issues = []

    if not draft.name:
        issues.append(ValidationIssue(
            field="name",
            issue_type="missing",
            message="Goal name is required",
        ))

    target, target_issues = check_positive_amount(draft.target_amount, "targetAmount")
    issues.extend(target_issues)

    return target, issues


def issues_from_pydantic(error) -> list[ValidationIssue]:
    """
    Translate a pydantic ValidationError raised while building a draft.

    Drafts are flat, so only the field name is kept; a union field that
    failed every branch is reported once.
    """
    issues = []
    seen = set()
    for err in error.errors():
        loc = err.get("loc", ())
        field = str(loc[0]) if loc else "__root__"
        if field in seen:
            continue
        seen.add(field)
        issues.append(ValidationIssue(
            field=field,
            issue_type="invalid_format",
            message=err.get("msg", "Invalid value"),
        ))
    return issues
