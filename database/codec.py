"""Flat-record encoding shared by every persistence backend and by JSON export.

A record is a mapping with id, amount, title, category, date, type and notes.
Field order does not matter and unknown fields are ignored, so files written
by newer versions still load.
"""
from datetime import datetime
from typing import Any, Iterable, Mapping

from models.category import Category
from models.transaction import Transaction, TransactionType
from services.errors import DecodeError

FIELDS = ("id", "amount", "title", "category", "date", "type", "notes")


def encode_transaction(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "amount": tx.amount,
        "title": tx.title,
        "category": tx.category.value,
        "date": tx.date.isoformat(),
        "type": tx.type.value,
        "notes": tx.notes,
    }


def encode_transactions(transactions: Iterable[Transaction]) -> list[dict]:
    return [encode_transaction(tx) for tx in transactions]


def parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string or Unix epoch seconds to a datetime.

    An offset in the string (including a trailing Z) is kept, so aware values
    come back aware. Epoch seconds and offset-free strings give naive local time.
    """
    if isinstance(value, bool):
        raise DecodeError(f"Invalid date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as e:
            raise DecodeError(f"Invalid epoch timestamp: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise DecodeError(f"Invalid ISO-8601 date: {value!r}") from e
        return parsed
    raise DecodeError(f"Invalid date: {value!r}")


def _require_str(record: Mapping, key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' must be a string, got {value!r}")
    return value


def decode_transaction(record: Any) -> Transaction:
    if not isinstance(record, Mapping):
        raise DecodeError(f"Transaction record must be an object, got {type(record).__name__}")
    for key in ("id", "amount", "title", "category", "date", "type"):
        if key not in record:
            raise DecodeError(f"Transaction record is missing '{key}'")

    amount = record["amount"]
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise DecodeError(f"Field 'amount' must be a number, got {amount!r}")

    try:
        category = Category(record["category"])
    except ValueError as e:
        raise DecodeError(f"Unknown category: {record['category']!r}") from e
    try:
        type_ = TransactionType(record["type"])
    except ValueError as e:
        raise DecodeError(f"Unknown transaction type: {record['type']!r}") from e

    notes = record.get("notes", "")
    if notes is None:
        notes = ""
    elif not isinstance(notes, str):
        raise DecodeError(f"Field 'notes' must be a string, got {notes!r}")

    return Transaction(
        id=_require_str(record, "id"),
        amount=float(amount),
        title=_require_str(record, "title"),
        category=category,
        date=parse_timestamp(record["date"]),
        type=type_,
        notes=notes,
    )


def decode_transactions(records: Any) -> list[Transaction]:
    """Decode a list of records. Any malformed record fails the whole batch."""
    if not isinstance(records, list):
        raise DecodeError(f"Expected a list of transactions, got {type(records).__name__}")
    return [decode_transaction(r) for r in records]
