import json
from datetime import datetime, timedelta, timezone

import pytest

from database.codec import decode_transaction, decode_transactions, encode_transaction, parse_timestamp
from database.db_manager import DatabaseManager
from database.json_store import JsonFileStore
from database.persistence import MemoryStore
from database.storage import open_storage
from database.transaction_dao import TransactionDAO
from models.category import Category
from models.transaction import Transaction, TransactionType
from services import query
from services.errors import DecodeError

from helpers import make_tx


def _sample():
    return [
        make_tx("1", 100, TransactionType.INCOME, Category.SALARY, datetime(2024, 3, 1, 9, 30)),
        make_tx("2", 40.25, TransactionType.EXPENSE, Category.FOOD, datetime(2024, 3, 2, 12, 0, 0, 1234),
                notes="café ☕"),
        Transaction.new(3, "Bus", Category.TRANSPORTATION, TransactionType.EXPENSE),
    ]


# ── Codec ─────────────────────────────────────────────────────────────────────

def test_encode_uses_flat_string_tags():
    record = encode_transaction(make_tx("1", 5, TransactionType.EXPENSE, Category.BILLS,
                                        datetime(2024, 1, 2, 3, 4, 5)))
    assert record == {
        "id": "1",
        "amount": 5,
        "title": "tx 1",
        "category": "Bills",
        "date": "2024-01-02T03:04:05",
        "type": "Expense",
        "notes": "",
    }


def test_decode_ignores_unknown_fields_and_defaults_notes():
    tx = decode_transaction({
        "type": "Income",
        "date": "2024-03-01T00:00:00",
        "id": "abc",
        "amount": 10,
        "title": "Gift",
        "category": "Other",
        "currency": "EUR",
    })
    assert tx == Transaction("abc", 10.0, "Gift", Category.OTHER, datetime(2024, 3, 1),
                             TransactionType.INCOME, "")


def test_parse_timestamp_accepts_epoch_and_utc_suffix():
    epoch = 1709251200  # 2024-03-01T00:00:00Z
    utc = datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert parse_timestamp(epoch) == datetime.fromtimestamp(epoch)
    assert parse_timestamp(epoch).tzinfo is None
    assert parse_timestamp("2024-03-01T00:00:00Z") == utc
    assert parse_timestamp("2024-03-01T00:00:00Z").tzinfo is not None
    assert parse_timestamp("2024-03-01T00:00:00+00:00") == utc
    assert parse_timestamp("2024-03-01T00:00:00").tzinfo is None


@pytest.mark.parametrize("backend", ["memory", "json", "sqlite"])
def test_aware_dates_survive_save_and_load(backend, tmp_path):
    late = datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)
    shifted = datetime(2024, 3, 2, 8, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    records = [make_tx("utc", 5, date=late), make_tx("ist", 7, date=shifted), make_tx("naive", 9)]
    store = open_storage(backend, str(tmp_path))

    store.save(records)
    loaded = store.load()
    store.close()

    assert loaded == records
    assert [t.date.utcoffset() for t in loaded] == [t.date.utcoffset() for t in records]
    plus_two = timezone(timedelta(hours=2))
    assert list(query.group_by_day(loaded, tz=plus_two)) == list(query.group_by_day(records, tz=plus_two))


@pytest.mark.parametrize(
    "record",
    [
        "not an object",
        {"id": "1", "amount": 1, "title": "x", "category": "Food", "date": "2024-01-01"},
        {"id": "1", "amount": True, "title": "x", "category": "Food", "date": "2024-01-01", "type": "Expense"},
        {"id": "1", "amount": "5", "title": "x", "category": "Food", "date": "2024-01-01", "type": "Expense"},
        {"id": 1, "amount": 5, "title": "x", "category": "Food", "date": "2024-01-01", "type": "Expense"},
        {"id": "1", "amount": 5, "title": "x", "category": "Rent", "date": "2024-01-01", "type": "Expense"},
        {"id": "1", "amount": 5, "title": "x", "category": "Food", "date": "yesterday", "type": "Expense"},
        {"id": "1", "amount": 5, "title": "x", "category": "Food", "date": "2024-01-01", "type": "Transfer"},
        {"id": "1", "amount": 5, "title": "x", "category": "Food", "date": "2024-01-01", "type": "Expense",
         "notes": 3},
    ],
)
def test_decode_rejects_malformed_records(record):
    with pytest.raises(DecodeError):
        decode_transaction(record)


def test_decode_transactions_requires_a_list():
    with pytest.raises(DecodeError):
        decode_transactions({"transactions": []})


# ── Backends ──────────────────────────────────────────────────────────────────

def test_json_store_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "data" / "transactions.json")
    sample = _sample()
    store.save(sample)

    assert store.load() == sample
    assert not (tmp_path / "data" / "transactions.json.tmp").exists()


def test_json_store_missing_file_loads_empty(tmp_path):
    errors = []
    store = JsonFileStore(tmp_path / "nothing.json", on_error=lambda op, e: errors.append(op))
    assert store.load() == []
    assert errors == []


def test_json_store_corrupt_file_loads_empty_and_reports(tmp_path):
    path = tmp_path / "transactions.json"
    path.write_text("{not json", encoding="utf-8")
    errors = []
    store = JsonFileStore(path, on_error=lambda op, e: errors.append(op))

    assert store.load() == []
    assert errors == ["load"]


def test_json_store_one_bad_record_fails_whole_load(tmp_path):
    path = tmp_path / "transactions.json"
    good = encode_transaction(make_tx("1", 5))
    path.write_text(json.dumps([good, {"id": "2"}]), encoding="utf-8")

    assert JsonFileStore(path).load() == []


def test_json_store_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a folder", encoding="utf-8")
    errors = []
    store = JsonFileStore(blocker / "transactions.json", on_error=lambda op, e: errors.append(op))

    store.save(_sample())
    assert errors == ["save"]


def test_sqlite_round_trip_preserves_order(tmp_path):
    db = DatabaseManager(str(tmp_path / "money.db"))
    db.initialize()
    dao = TransactionDAO(db)
    sample = list(reversed(_sample())) + [make_tx("1", 1)]

    dao.save(sample)
    assert dao.load() == sample
    assert dao.count() == 4

    dao.save(sample[:1])
    assert dao.load() == sample[:1]
    dao.close()


def test_sqlite_missing_table_loads_empty(tmp_path):
    errors = []
    dao = TransactionDAO(DatabaseManager(str(tmp_path / "empty.db")), on_error=lambda op, e: errors.append(op))
    assert dao.load() == []
    assert errors == ["load"]
    dao.close()


def test_memory_store_round_trip():
    store = MemoryStore()
    sample = _sample()
    store.save(sample)
    assert store.load() == sample
    assert store.save_count == 1


def test_error_hook_failures_do_not_escape(tmp_path):
    path = tmp_path / "transactions.json"
    path.write_text("[1, 2]", encoding="utf-8")

    def broken_hook(op, exc):
        raise RuntimeError("hook broke")

    assert JsonFileStore(path, on_error=broken_hook).load() == []


# ── Factory ───────────────────────────────────────────────────────────────────

def test_open_storage_picks_backend(tmp_path):
    json_store = open_storage("json", str(tmp_path))
    assert isinstance(json_store, JsonFileStore)
    assert json_store.path == tmp_path / "transactions.json"

    sqlite_store = open_storage("sqlite", str(tmp_path))
    assert isinstance(sqlite_store, TransactionDAO)
    assert (tmp_path / "money_tracker.db").exists()
    sqlite_store.close()

    assert isinstance(open_storage("memory"), MemoryStore)


def test_open_storage_rejects_unknown_backend():
    with pytest.raises(ValueError):
        open_storage("cloud")
