"""
Ledger Store

Owns the transaction collection. The only way to change the ledger is
through add_transaction / delete_transaction; list_transactions hands out
an immutable snapshot.

GUARANTEES:
- A rejected draft never mutates the ledger or touches storage
- Ids are unique and never reused, even after deletion or a reload
- Deleting an unknown id is a successful no-op that still writes the collection
"""

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from family_budget.audit import AuditLogger
from family_budget.exceptions import ValidationError
from family_budget.models.ledger import Transaction, TransactionDraft
from family_budget.services.persistence import TRANSACTIONS_KEY, PersistenceAdapter
from family_budget.stores.base import CollectionStore
from family_budget.stores.ids import IdGenerator
from family_budget.stores.samples import sample_transactions
from family_budget.stores.validation import issues_from_pydantic, validate_transaction_draft


class LedgerStore(CollectionStore):
    """
    The ledger: every recorded transaction, in insertion order.

    Constructed once per session; loads the persisted collection
    immediately.
    """

    collection = TRANSACTIONS_KEY

    def __init__(
        self,
        persistence: PersistenceAdapter,
        audit_logger: Optional[AuditLogger] = None,
        enforce_taxonomy: bool = False,
        seed_samples: bool = False,
        id_generator: Optional[IdGenerator] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            persistence: Adapter the ledger is loaded from and saved to
            audit_logger: Where mutations are logged (process default if None)
            enforce_taxonomy: Reject categories outside the type's allowed list
            seed_samples: Install sample transactions if the ledger was never saved
            id_generator: Id source (tests inject a fixed clock)
            today: Date used for drafts without a date
        """
        super().__init__(persistence, audit_logger)
        self._enforce_taxonomy = enforce_taxonomy
        self._today = today or date.today

        loaded = persistence.load_transactions()
        seeded = loaded is None and seed_samples
        if seeded:
            loaded = sample_transactions()
        self._transactions: list[Transaction] = list(loaded or [])

        self._ids = id_generator or IdGenerator()
        self._ids.observe(t.id for t in self._transactions)

        if seeded:
            self._persist_initial()

    def __len__(self) -> int:
        return len(self._transactions)

    def add_transaction(
        self,
        draft: Union[TransactionDraft, Mapping[str, Any]],
    ) -> Transaction:
        """
        Validate a draft and append it to the ledger.

        Returns:
            The created transaction (with its new id)

        Raises:
            ValidationError: Category empty/not allowed or amount not a positive number
            PersistenceError: Ledger updated in memory but not saved
        """
        draft = self._coerce_draft(draft)

        with self._lock:
            amount, issues = validate_transaction_draft(draft, self._enforce_taxonomy)
            if issues:
                self._reject(issues)

            try:
                transaction = Transaction(
                    id=self._ids.next_id(),
                    type=draft.type,
                    category=draft.category,
                    amount=amount,
                    date=draft.date or self._today(),
                    description=draft.description,
                )
            except PydanticValidationError as e:
                self._reject(issues_from_pydantic(e))

            self._transactions.append(transaction)
            self._persist()

        self._audit.log_transaction_added(
            transaction_id=transaction.id,
            transaction_type=transaction.type.value,
            category=transaction.category,
            amount=transaction.amount,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Remove a transaction by id.

        The collection is written even when the id is unknown, so a call
        that returns normally always leaves storage matching memory
        (including after an earlier failed write).

        Returns:
            True if a transaction was removed, False if the id was unknown

        Raises:
            PersistenceError: Collection not saved (any removal is kept in memory)
        """
        with self._lock:
            remaining = [t for t in self._transactions if t.id != transaction_id]
            existed = len(remaining) != len(self._transactions)
            self._transactions = remaining
            self._persist()

        self._audit.log_transaction_deleted(transaction_id, existed)
        return existed

    def list_transactions(self) -> tuple[Transaction, ...]:
        """
        All transactions in insertion order.

        Use analytics.sorted_by_date() for the newest-first view.
        """
        with self._lock:
            return tuple(self._transactions)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with self._lock:
            for transaction in self._transactions:
                if transaction.id == transaction_id:
                    return transaction
        return None

    def _write(self) -> None:
        self._persistence.save_transactions(self._transactions)

    def _coerce_draft(self, draft) -> TransactionDraft:
        if isinstance(draft, TransactionDraft):
            return draft
        try:
            return TransactionDraft.model_validate(draft)
        except PydanticValidationError as e:
            self._reject(issues_from_pydantic(e))

    def _reject(self, issues) -> None:
        self._audit.log_validation_failed(
            "add_transaction",
            [issue.model_dump() for issue in issues],
        )
        raise ValidationError(issues)
