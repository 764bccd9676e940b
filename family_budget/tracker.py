"""
Session Facade for Family Budget

This module ties the components together for a presentation layer:
- LedgerStore and GoalStore (the only owners of data)
- PersistenceAdapter (theme lives here too)
- Analytics (recomputed from the current ledger on demand)
- AuditLogger

DESIGN DECISION: The stores signal failure with exceptions. The facade
converts the three expected failure kinds into OperationResult values so
a UI can show a notification without a try/except around every button.
Anything else (a bug) propagates.
"""

from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

from family_budget import analytics
from family_budget.audit import AuditLogger
from family_budget.config import Settings, get_settings
from family_budget.exceptions import NotFoundError, PersistenceError, ValidationError
from family_budget.models.analytics import AnalyticsSummary
from family_budget.models.ledger import (
    FinancialGoal,
    GoalDraft,
    Theme,
    Transaction,
    TransactionDraft,
)
from family_budget.models.results import OperationResult
from family_budget.services.persistence import PersistenceAdapter
from family_budget.services.storage import (
    CollectionStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
)
from family_budget.stores import GoalStore, LedgerStore


class FinanceTracker:
    """
    One user session.

    Construct once (see create_tracker) and inject into the UI. The UI
    calls mutations here and re-reads dashboard() afterwards.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        goals: GoalStore,
        persistence: PersistenceAdapter,
        audit_logger: AuditLogger,
        top_categories_limit: int = 5,
        period_days: int = 30,
    ):
        self._ledger = ledger
        self._goals = goals
        self._persistence = persistence
        self._audit_logger = audit_logger
        self._top_categories_limit = top_categories_limit
        self._period_days = period_days
        self._theme = persistence.load_theme()
        self._theme_synced = True

    @property
    def ledger(self) -> LedgerStore:
        return self._ledger

    @property
    def goal_store(self) -> GoalStore:
        return self._goals

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def is_synced(self) -> bool:
        """True when every collection in memory matches storage."""
        return self._ledger.is_synced and self._goals.is_synced and self._theme_synced

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        draft: Union[TransactionDraft, Mapping[str, Any]],
    ) -> OperationResult:
        return self._run("add_transaction", lambda: self._ledger.add_transaction(draft))

    def delete_transaction(self, transaction_id: str) -> OperationResult:
        return self._run(
            "delete_transaction",
            lambda: self._ledger.delete_transaction(transaction_id),
        )

    def add_goal(self, draft: Union[GoalDraft, Mapping[str, Any]]) -> OperationResult:
        return self._run("add_goal", lambda: self._goals.add_goal(draft))

    def contribute(self, goal_id: str, amount: Any) -> OperationResult:
        return self._run("contribute", lambda: self._goals.contribute(goal_id, amount))

    def set_theme(self, theme: Union[Theme, str]) -> OperationResult:
        try:
            theme = Theme(theme)
        except ValueError:
            return OperationResult.failed(
                "set_theme",
                error_type="validation",
                error_message=f"Unknown theme: {theme!r}",
            )

        def apply() -> Theme:
            self._theme = theme
            try:
                self._persistence.save_theme(theme)
            except PersistenceError as e:
                self._theme_synced = False
                self._audit_logger.log_persistence_failed("theme", str(e))
                raise
            self._theme_synced = True
            self._audit_logger.log_theme_changed(theme.value)
            return theme

        return self._run("set_theme", apply)

    def sync(self) -> OperationResult:
        """Retry persisting everything that is out of sync."""

        def flush_all() -> bool:
            if not self._ledger.is_synced:
                self._ledger.flush()
            if not self._goals.is_synced:
                self._goals.flush()
            if not self._theme_synced:
                self._persistence.save_theme(self._theme)
                self._theme_synced = True
                self._audit_logger.log_persistence_recovered("theme")
            return True

        return self._run("sync", flush_all)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def transactions(self) -> list[Transaction]:
        """Ledger snapshot, newest first."""
        return analytics.sorted_by_date(self._ledger.list_transactions())

    def goals(self) -> tuple[FinancialGoal, ...]:
        return self._goals.list_goals()

    def theme(self) -> Theme:
        return self._theme

    def dashboard(self) -> AnalyticsSummary:
        """All dashboard figures for the current ledger."""
        return analytics.build_summary(
            self._ledger.list_transactions(),
            top_n=self._top_categories_limit,
            period_days=self._period_days,
        )

    # -------------------------------------------------------------------------

    def _run(self, operation: str, action: Callable[[], Any]) -> OperationResult:
        try:
            return OperationResult.ok(operation, action())
        except ValidationError as e:
            return OperationResult.failed(
                operation,
                error_type="validation",
                error_message=str(e),
                issues=e.issues,
            )
        except NotFoundError as e:
            return OperationResult.failed(
                operation,
                error_type="not_found",
                error_message=str(e),
            )
        except PersistenceError as e:
            return OperationResult.failed(
                operation,
                error_type="persistence",
                error_message=f"Changes are kept in memory but were not saved: {e}",
                out_of_sync=True,
            )


def create_storage(settings: Optional[Settings] = None) -> CollectionStorageInterface:
    """Build the storage backend named in the settings."""
    settings = settings or get_settings()
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(settings=storage_settings)


def create_tracker(
    settings: Optional[Settings] = None,
    storage: Optional[CollectionStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> FinanceTracker:
    """
    Factory function to create a session with all components wired.

    Args:
        settings: Settings to use (cached global settings if None)
        storage: Storage backend override (e.g. InMemoryStorage in tests)
        audit_logger: Audit logger override

    Returns:
        A ready FinanceTracker
    """
    settings = settings or get_settings()
    app_settings = settings.app

    persistence = PersistenceAdapter(storage or create_storage(settings))
    audit_logger = audit_logger or AuditLogger()

    ledger = LedgerStore(
        persistence,
        audit_logger=audit_logger,
        enforce_taxonomy=app_settings.enforce_category_taxonomy,
        seed_samples=app_settings.seed_sample_data,
    )
    goals = GoalStore(
        persistence,
        audit_logger=audit_logger,
        seed_samples=app_settings.seed_sample_data,
    )

    return FinanceTracker(
        ledger=ledger,
        goals=goals,
        persistence=persistence,
        audit_logger=audit_logger,
        top_categories_limit=app_settings.top_categories_limit,
        period_days=app_settings.daily_average_period_days,
    )
