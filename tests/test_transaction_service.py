from datetime import datetime

import pytest

from database.persistence import MemoryStore
from database.codec import encode_transactions
from models.category import Category
from models.transaction import TransactionType
from services.errors import InvalidInputError
from services.transaction_service import TransactionService

from helpers import make_tx


class FailingStore:
    """Persistence collaborator that breaks the contract by raising."""

    def __init__(self):
        self.save_calls = 0

    def load(self):
        raise OSError("disk gone")

    def save(self, transactions):
        self.save_calls += 1
        raise OSError("disk full")


def test_initialize_loads_persisted_records(scenario):
    store = MemoryStore(encode_transactions(scenario))
    svc = TransactionService(store)
    svc.initialize()

    assert svc.all() == tuple(scenario)


def test_initialize_with_undecodable_data_starts_empty():
    errors = []
    store = MemoryStore([{"id": "1", "amount": "lots"}], on_error=lambda op, e: errors.append(op))
    svc = TransactionService(store)
    svc.initialize()

    assert svc.all() == ()
    assert errors == ["load"]


def test_raising_collaborator_is_contained():
    errors = []
    svc = TransactionService(FailingStore(), on_error=lambda op, e: errors.append((op, str(e))))
    svc.initialize()
    svc.add(make_tx("1", 5))

    assert [t.id for t in svc.all()] == ["1"]
    assert errors == [("load", "disk gone"), ("save", "disk full")]


def test_add_appends_and_persists(service, memory_store):
    service.add(make_tx("1", 10))
    service.add(make_tx("2", 20))

    assert [t.id for t in service.all()] == ["1", "2"]
    assert [r["id"] for r in memory_store.records] == ["1", "2"]
    assert memory_store.save_count == 2


def test_add_does_not_reject_duplicate_ids(service):
    service.add(make_tx("dup", 10))
    service.add(make_tx("dup", 20))
    assert len(service) == 2


def test_update_replaces_in_place(service, memory_store):
    for tx in (make_tx("1", 10), make_tx("2", 20), make_tx("3", 30)):
        service.add(tx)

    changed = make_tx("2", 99, title="changed")
    assert service.update(changed) is True

    assert [t.id for t in service.all()] == ["1", "2", "3"]
    assert service.get_by_id("2") == changed
    assert memory_store.records[1]["amount"] == 99


def test_update_is_idempotent(service):
    service.add(make_tx("1", 10))
    changed = make_tx("1", 11)
    service.update(changed)
    once = service.all()
    service.update(changed)
    assert service.all() == once


def test_update_unknown_id_is_a_silent_noop(service, memory_store):
    service.add(make_tx("1", 10))
    saves = memory_store.save_count

    assert service.update(make_tx("missing", 1)) is False
    assert [t.amount for t in service.all()] == [10]
    assert memory_store.save_count == saves


def test_update_touches_first_duplicate_only(service):
    service.add(make_tx("dup", 1))
    service.add(make_tx("dup", 2))
    service.update(make_tx("dup", 3))
    assert [t.amount for t in service.all()] == [3, 2]


def test_delete_removes_all_matches(service):
    service.add(make_tx("dup", 1))
    service.add(make_tx("keep", 2))
    service.add(make_tx("dup", 3))

    assert service.delete(make_tx("dup", 0)) == 2
    assert [t.id for t in service.all()] == ["keep"]


def test_delete_absent_id_leaves_collection_unchanged(service):
    service.add(make_tx("1", 10))
    before = service.all()
    assert service.delete(make_tx("nope", 1)) == 0
    assert service.all() == before


def test_all_is_a_read_only_snapshot(service):
    service.add(make_tx("1", 10))
    snapshot = service.all()
    service.add(make_tx("2", 20))

    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1


def test_replace_all(service, memory_store, scenario):
    service.add(make_tx("old", 1))
    service.replace_all(scenario)
    assert service.all() == tuple(scenario)
    assert [r["id"] for r in memory_store.records] == ["1", "2", "3"]


def test_create_validates_and_adds(service):
    tx = service.create(
        12.0, "  Lunch ", Category.FOOD, TransactionType.EXPENSE,
        date=datetime(2024, 5, 1), notes=" with team ",
    )
    assert service.all() == (tx,)
    assert tx.title == "Lunch"
    assert tx.notes == "with team"


@pytest.mark.parametrize(
    "amount, title, category, type_",
    [
        (0, "Zero", Category.FOOD, TransactionType.EXPENSE),
        (-5, "Negative", Category.FOOD, TransactionType.EXPENSE),
        (float("nan"), "NaN", Category.FOOD, TransactionType.EXPENSE),
        (10, "   ", Category.FOOD, TransactionType.EXPENSE),
        (10, "Wrong side", Category.SALARY, TransactionType.EXPENSE),
        (10, "Wrong side", Category.FOOD, TransactionType.INCOME),
    ],
)
def test_create_rejects_invalid_input(service, amount, title, category, type_):
    with pytest.raises(InvalidInputError):
        service.create(amount, title, category, type_)
    assert service.all() == ()


def test_revise_updates_existing_record(service):
    tx = service.create(50, "Gym", Category.HEALTHCARE, TransactionType.EXPENSE)
    revised = service.revise(tx, amount=55.0, notes="new price")

    assert revised.id == tx.id
    assert service.all() == (revised,)


def test_revise_rejects_category_from_other_partition(service):
    tx = service.create(50, "Gym", Category.HEALTHCARE, TransactionType.EXPENSE)
    with pytest.raises(InvalidInputError):
        service.revise(tx, type=TransactionType.INCOME)
    assert service.all() == (tx,)


def test_raw_add_stays_permissive(service):
    service.add(make_tx("odd", 10, TransactionType.INCOME, Category.FOOD))
    assert len(service) == 1


def test_close_closes_backend():
    class ClosingStore(MemoryStore):
        closed = False

        def close(self):
            self.closed = True

    store = ClosingStore()
    svc = TransactionService(store)
    svc.close()
    assert store.closed
