"""
Shared plumbing for the collection stores.

A store owns one in-memory collection and the lock that guards it.
Every mutation runs validate -> mutate -> persist under that lock.

CRITICAL: If the persist step fails, the mutation is NOT rolled back.
The store marks itself out of sync and re-raises PersistenceError so the
caller can warn the user and retry with flush() without redoing the
validated mutation.
"""

import threading
from typing import Optional

from family_budget.audit import AuditLogger, get_audit_logger
from family_budget.exceptions import PersistenceError
from family_budget.services.persistence import PersistenceAdapter


class CollectionStore:
    """Base class for LedgerStore and GoalStore."""

    collection: str = ""

    def __init__(
        self,
        persistence: PersistenceAdapter,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._persistence = persistence
        self._audit = audit_logger or get_audit_logger()
        self._lock = threading.RLock()
        self._synced = True

    @property
    def is_synced(self) -> bool:
        """False while memory holds changes the storage does not."""
        return self._synced

    def flush(self) -> None:
        """
        Persist the current collection.

        Use after a PersistenceError to bring storage back in sync.

        Raises:
            PersistenceError: If the write fails again
        """
        with self._lock:
            self._persist()

    def _write(self) -> None:
        raise NotImplementedError

    def _persist(self) -> None:
        """Write the collection, tracking sync state. Caller holds the lock."""
        was_synced = self._synced
        try:
            self._write()
        except PersistenceError as e:
            self._synced = False
            self._audit.log_persistence_failed(self.collection, str(e))
            raise
        self._synced = True
        if not was_synced:
            self._audit.log_persistence_recovered(self.collection)

    def _persist_initial(self) -> None:
        """
        Write freshly seeded data during construction.

        A failure here must not prevent the session from starting; the
        store simply starts out of sync (see is_synced) and the failure
        is in the audit log.
        """
        try:
            self._persist()
        except PersistenceError:
            pass
