"""Tests for LedgerStore: validation, ids, persistence, sync state."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest

from family_budget.audit import AuditLogger
from family_budget.exceptions import PersistenceError, ValidationError
from family_budget.models import AuditEventType, TransactionDraft, TransactionType
from family_budget.services import PersistenceAdapter, TRANSACTIONS_KEY
from family_budget.stores import IdGenerator, LedgerStore

from tests.conftest import FROZEN_NOW, TODAY, FlakyStorage


def draft(**overrides) -> TransactionDraft:
    fields = {
        "type": "expense",
        "category": "Продукты",
        "amount": "12500",
        "date": "2025-10-05",
        "description": "Покупки в супермаркете",
    }
    fields.update(overrides)
    return TransactionDraft(**fields)


class TestAddTransaction:
    """add_transaction validates, appends and persists."""

    def test_adds_exactly_one_matching_entry(self, ledger):
        before = ledger.list_transactions()
        created = ledger.add_transaction(draft())
        after = ledger.list_transactions()

        assert len(after) == len(before) + 1
        assert after[-1] == created
        assert created.type == TransactionType.EXPENSE
        assert created.category == "Продукты"
        assert created.amount == 12500
        assert created.date == date(2025, 10, 5)
        assert created.description == "Покупки в супермаркете"

    def test_ids_are_fresh_and_increasing(self, ledger):
        first = ledger.add_transaction(draft())
        second = ledger.add_transaction(draft(amount=1))
        third = ledger.add_transaction(draft(amount=2))
        ids = [first.id, second.id, third.id]
        assert len(set(ids)) == 3
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    def test_accepts_plain_dict(self, ledger):
        created = ledger.add_transaction({
            "type": "income",
            "category": "Зарплата",
            "amount": 85000,
        })
        assert created.type == TransactionType.INCOME
        assert created.amount == 85000

    def test_missing_date_defaults_to_today(self, ledger):
        created = ledger.add_transaction(draft(date=""))
        assert created.date == TODAY

    def test_amount_text_with_spaces_and_comma(self, ledger):
        created = ledger.add_transaction(draft(amount="12 500,50"))
        assert created.amount == Decimal("12500.50")

    def test_float_amount_keeps_its_decimal_value(self, ledger):
        created = ledger.add_transaction({"category": "Связь", "amount": 0.1})
        assert created.amount == Decimal("0.1")

    def test_persists_after_add(self, ledger, persistence):
        created = ledger.add_transaction(draft())
        assert persistence.load_transactions() == [created]

    def test_taxonomy_is_advisory_by_default(self, ledger):
        created = ledger.add_transaction(draft(category="Зарплата"))
        assert created.category == "Зарплата"


class TestAddTransactionValidation:
    """Rejected drafts never mutate or write."""

    @pytest.mark.parametrize("overrides, field", [
        ({"category": ""}, "category"),
        ({"category": "   "}, "category"),
        ({"amount": ""}, "amount"),
        ({"amount": None}, "amount"),
        ({"amount": "abc"}, "amount"),
        ({"amount": "0"}, "amount"),
        ({"amount": -50}, "amount"),
        ({"amount": "nan"}, "amount"),
        ({"amount": "inf"}, "amount"),
    ])
    def test_rejects_invalid_field(self, ledger, storage, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            ledger.add_transaction(draft(**overrides))

        assert exc_info.value.fields == [field]
        assert ledger.list_transactions() == ()
        assert storage.write_count == 0

    def test_reports_every_invalid_field(self, ledger):
        with pytest.raises(ValidationError) as exc_info:
            ledger.add_transaction(draft(category="", amount="0"))
        assert exc_info.value.fields == ["category", "amount"]

    @pytest.mark.parametrize("amount", [True, False])
    def test_boolean_amount_is_rejected(self, ledger, storage, amount):
        with pytest.raises(ValidationError) as exc_info:
            ledger.add_transaction({"category": "Продукты", "amount": amount})
        assert exc_info.value.fields == ["amount"]
        assert ledger.list_transactions() == ()
        assert storage.write_count == 0

    def test_rejects_fractions_of_a_kopeck(self, ledger):
        with pytest.raises(ValidationError) as exc_info:
            ledger.add_transaction(draft(amount="10,005"))
        assert exc_info.value.issues[0].issue_type == "invalid_value"

    def test_bad_type_in_dict(self, ledger):
        with pytest.raises(ValidationError) as exc_info:
            ledger.add_transaction({"type": "transfer", "category": "X", "amount": 1})
        assert exc_info.value.fields == ["type"]
        assert len(ledger) == 0

    def test_validation_failure_is_audited(self, ledger, audit_logger):
        with pytest.raises(ValidationError):
            ledger.add_transaction(draft(category=""))
        latest = audit_logger.recent_events(1)[0]
        assert latest.event_type == AuditEventType.VALIDATION_FAILED

    def test_enforced_taxonomy(self, persistence, audit_logger):
        strict = LedgerStore(persistence, audit_logger=audit_logger, enforce_taxonomy=True)
        with pytest.raises(ValidationError) as exc_info:
            strict.add_transaction(draft(type="expense", category="Зарплата"))
        assert exc_info.value.issues[0].issue_type == "not_allowed"

        created = strict.add_transaction(draft(type="income", category="Зарплата"))
        assert created.is_income


class TestDeleteTransaction:
    """delete_transaction is idempotent."""

    def test_removes_matching_transaction(self, ledger, persistence):
        keep = ledger.add_transaction(draft(amount=1))
        gone = ledger.add_transaction(draft(amount=2))

        assert ledger.delete_transaction(gone.id) is True
        assert ledger.list_transactions() == (keep,)
        assert persistence.load_transactions() == [keep]

    def test_delete_twice_equals_delete_once(self, ledger):
        ledger.add_transaction(draft(amount=1))
        target = ledger.add_transaction(draft(amount=2))

        ledger.delete_transaction(target.id)
        once = ledger.list_transactions()
        assert ledger.delete_transaction(target.id) is False
        assert ledger.list_transactions() == once

    def test_unknown_id_changes_nothing_but_still_writes(self, ledger, storage, persistence):
        created = ledger.add_transaction(draft())
        writes = storage.write_count
        assert ledger.delete_transaction("does-not-exist") is False
        assert ledger.list_transactions() == (created,)
        assert storage.write_count == writes + 1
        assert persistence.load_transactions() == [created]

    def test_deleted_id_is_never_reused(self, ledger):
        created = ledger.add_transaction(draft())
        ledger.delete_transaction(created.id)
        again = ledger.add_transaction(draft())
        assert again.id != created.id
        assert int(again.id) > int(created.id)


class TestLoading:
    """Construction loads (or seeds) the persisted ledger."""

    def test_reload_sees_saved_transactions(self, ledger, persistence, audit_logger):
        created = ledger.add_transaction(draft())
        reloaded = LedgerStore(persistence, audit_logger=audit_logger)
        assert reloaded.list_transactions() == (created,)

    def test_ids_after_reload_follow_persisted_ids(self, ledger, persistence):
        created = ledger.add_transaction(draft())
        ledger.delete_transaction(created.id)
        ledger.add_transaction(draft())
        # clock now behind the persisted ids
        reloaded = LedgerStore(
            persistence,
            id_generator=IdGenerator(clock=lambda: FROZEN_NOW - 3600),
        )
        fresh = reloaded.add_transaction(draft())
        assert int(fresh.id) > max(int(t.id) for t in ledger.list_transactions())

    def test_seeds_samples_on_first_run(self, persistence, storage):
        seeded = LedgerStore(persistence, seed_samples=True)
        assert len(seeded) == 6
        assert storage.exists(TRANSACTIONS_KEY)

    def test_does_not_seed_an_empty_saved_ledger(self, persistence):
        persistence.save_transactions([])
        store = LedgerStore(persistence, seed_samples=True)
        assert len(store) == 0

    def test_no_seeding_by_default(self, persistence, storage):
        store = LedgerStore(persistence)
        assert len(store) == 0
        assert not storage.exists(TRANSACTIONS_KEY)


class TestPersistenceFailure:
    """A failed write keeps the mutation in memory and is surfaced."""

    def test_failed_write_raises_and_keeps_mutation(self, ledger, storage):
        storage.fail_writes = True
        with pytest.raises(PersistenceError):
            ledger.add_transaction(draft())

        assert len(ledger) == 1
        assert ledger.is_synced is False

    def test_flush_recovers(self, ledger, storage, persistence, audit_logger):
        storage.fail_writes = True
        with pytest.raises(PersistenceError):
            ledger.add_transaction(draft())

        storage.fail_writes = False
        ledger.flush()

        assert ledger.is_synced is True
        assert persistence.load_transactions() == list(ledger.list_transactions())
        types = [e.event_type for e in audit_logger.recent_events(5)]
        assert AuditEventType.PERSISTENCE_RECOVERED in types
        assert AuditEventType.PERSISTENCE_FAILED in types

    def test_seeding_failure_leaves_store_out_of_sync(self):
        storage = FlakyStorage()
        storage.fail_writes = True
        store = LedgerStore(PersistenceAdapter(storage), audit_logger=AuditLogger(), seed_samples=True)
        assert len(store) == 6
        assert store.is_synced is False

    def test_delete_of_unknown_id_brings_storage_back_in_sync(self, ledger, storage, persistence):
        storage.fail_writes = True
        with pytest.raises(PersistenceError):
            ledger.add_transaction(draft())
        storage.fail_writes = False

        assert ledger.delete_transaction("missing") is False
        assert ledger.is_synced is True
        assert persistence.load_transactions() == list(ledger.list_transactions())


class TestConcurrency:
    """The store lock serializes validate -> mutate -> persist."""

    def test_interleaved_adds_and_deletes(self, ledger, persistence):
        workers, per_worker = 8, 25

        def work(worker):
            created = []
            for i in range(per_worker):
                created.append(ledger.add_transaction(draft(amount=worker * 100 + i + 1)))
                if i % 2 == 1:
                    # drop the one added just before this one
                    assert ledger.delete_transaction(created[-2].id) is True
            return created

        with ThreadPoolExecutor(max_workers=workers) as pool:
            batches = list(pool.map(work, range(workers)))

        created_ids = [t.id for batch in batches for t in batch]
        assert len(set(created_ids)) == workers * per_worker

        kept = ledger.list_transactions()
        assert len(kept) == workers * (per_worker - per_worker // 2)
        assert persistence.load_transactions() == list(kept)
        assert ledger.is_synced is True
