"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger or goals is logged.
This provides:
1. Traceability of every change
2. Debugging capability when a write fails
3. A short in-memory history the UI can show

The audit logger:
- Is synchronous, like the stores that call it
- Never raises (a logging problem must not break a store operation)
- Keeps only a bounded window of recent events in memory
"""

from collections import deque
from decimal import Decimal
from typing import Optional

import structlog

from family_budget.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and remembers the most
    recent ones for display.
    """

    def __init__(self, history_size: int = 200):
        """
        Args:
            history_size: How many events recent_events() can return.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("family_budget.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event (level chosen by severity)."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Most recent events, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._history))[:limit]

    def log_transaction_added(
        self,
        transaction_id: str,
        transaction_type: str,
        category: str,
        amount: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            category=category,
            amount=amount,
        ))

    def log_transaction_deleted(self, transaction_id: str, existed: bool) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id, existed))

    def log_goal_added(self, goal_id: str, name: str, target_amount: Decimal) -> None:
        self.log(AuditEventBuilder.goal_added(goal_id, name, target_amount))

    def log_goal_contributed(
        self,
        goal_id: str,
        requested: Decimal,
        applied: Decimal,
        current_amount: Decimal,
        target_amount: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.goal_contributed(
            goal_id=goal_id,
            requested=requested,
            applied=applied,
            current_amount=current_amount,
            target_amount=target_amount,
        ))

    def log_theme_changed(self, theme: str) -> None:
        self.log(AuditEventBuilder.theme_changed(theme))

    def log_validation_failed(self, operation: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(operation, issues))

    def log_not_found(self, entity_type: str, entity_id: str, operation: str) -> None:
        self.log(AuditEventBuilder.not_found(entity_type, entity_id, operation))

    def log_persistence_failed(self, collection: str, error_message: str) -> None:
        self.log(AuditEventBuilder.persistence_failed(collection, error_message))

    def log_persistence_recovered(self, collection: str) -> None:
        self.log(AuditEventBuilder.persistence_recovered(collection))


_default_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Process-wide logger used when a store is built without one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = AuditLogger()
    return _default_logger
