"""
Audit Models for Family Budget

Every mutation of the ledger or the goals is recorded as an audit event.
This provides:
1. Traceability of what changed and when
2. Debugging information when a write fails
3. A history the UI can show ("recent activity")

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"

    # Goals
    GOAL_ADDED = "goal_added"
    GOAL_CONTRIBUTED = "goal_contributed"
    GOAL_COMPLETED = "goal_completed"

    # Preferences
    THEME_CHANGED = "theme_changed"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    PERSISTENCE_FAILED = "persistence_failed"
    PERSISTENCE_RECOVERED = "persistence_recovered"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('transaction', 'goal', 'theme')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction)
        event = AuditEventBuilder.persistence_failed("goals", str(exc))
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        category: str,
        amount: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction added: {transaction_type} {amount} ₽ ({category})",
            details={
                "type": transaction_type,
                "category": category,
                "amount": str(amount),
            },
        )

    @staticmethod
    def transaction_deleted(transaction_id: str, existed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            severity=AuditSeverity.INFO if existed else AuditSeverity.DEBUG,
            entity_type="transaction",
            entity_id=transaction_id,
            description=(
                "Transaction deleted" if existed
                else "Delete requested for unknown transaction (no-op)"
            ),
            details={"existed": existed},
        )

    @staticmethod
    def goal_added(goal_id: str, name: str, target_amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_ADDED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Goal created: {name}",
            details={"name": name, "target_amount": str(target_amount)},
        )

    @staticmethod
    def goal_contributed(
        goal_id: str,
        requested: Decimal,
        applied: Decimal,
        current_amount: Decimal,
        target_amount: Decimal,
    ) -> AuditEvent:
        """
        GOAL_COMPLETED only for the contribution that reaches the target;
        topping up a finished goal (applied == 0) stays GOAL_CONTRIBUTED.
        """
        completed = applied > 0 and current_amount >= target_amount
        return AuditEvent(
            event_type=(
                AuditEventType.GOAL_COMPLETED if completed
                else AuditEventType.GOAL_CONTRIBUTED
            ),
            entity_type="goal",
            entity_id=goal_id,
            description=f"Contributed {applied} ₽ to goal",
            details={
                "requested": str(requested),
                "applied": str(applied),
                "clamped": applied < requested,
                "current_amount": str(current_amount),
                "target_amount": str(target_amount),
            },
        )

    @staticmethod
    def theme_changed(theme: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_CHANGED,
            entity_type="theme",
            description=f"Theme set to {theme}",
            details={"theme": theme},
        )

    @staticmethod
    def validation_failed(operation: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{operation} rejected with {len(issues)} issues",
            details={"operation": operation, "issues": issues},
        )

    @staticmethod
    def not_found(entity_type: str, entity_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{operation}: {entity_type} not found",
            details={"operation": operation},
        )

    @staticmethod
    def persistence_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Failed to persist {collection}; in-memory state is ahead of storage",
            details={"collection": collection},
            error_message=error_message,
        )

    @staticmethod
    def persistence_recovered(collection: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_RECOVERED,
            description=f"{collection} persisted after an earlier failure",
            details={"collection": collection},
        )
