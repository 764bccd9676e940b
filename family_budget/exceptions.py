"""
Exception hierarchy for the Family Budget core.

Every error is recoverable at the call site:
- ValidationError: the draft was rejected, nothing changed
- NotFoundError: the referenced record does not exist, nothing changed
- PersistenceError: memory changed but storage did not (store is out of sync)
"""

from typing import Optional

from family_budget.models.results import ValidationIssue


class FinanceTrackerError(Exception):
    """Base exception for the Family Budget core."""
    pass


class ValidationError(FinanceTrackerError, ValueError):
    """
    A draft failed validation.

    Carries every issue found, not just the first one, so the UI can
    highlight all bad fields at once.
    """

    def __init__(self, issues: list[ValidationIssue], message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            message = "; ".join(f"{i.field}: {i.message}" for i in self.issues)
        super().__init__(message or "Validation failed")

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed validation."""
        return [issue.field for issue in self.issues]


class NotFoundError(FinanceTrackerError, LookupError):
    """Referenced record is absent from the collection."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


class PersistenceError(FinanceTrackerError):
    """The durable store is unreachable or rejected the operation."""
    pass


class CorruptDataError(PersistenceError):
    """Stored data could not be decoded into valid records."""
    pass
