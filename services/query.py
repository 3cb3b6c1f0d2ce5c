"""Filtered views over a transaction collection.

Every function is pure: it reads the collection it is given and returns a new
list, so callers can pass ``TransactionService.all()`` snapshots directly.
"""
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from models.category import Category
from models.transaction import Transaction, TransactionType
from utils.date_helpers import instant, local_date, same_month


def filter_by_type(
    collection: Iterable[Transaction], type_: Optional[TransactionType] = None
) -> list[Transaction]:
    if type_ is None:
        return list(collection)
    return [t for t in collection if t.type == type_]


def filter_by_category(
    collection: Iterable[Transaction], category: Optional[Category] = None
) -> list[Transaction]:
    if category is None:
        return list(collection)
    return [t for t in collection if t.category == category]


def filter_by_search(collection: Iterable[Transaction], text: str = "") -> list[Transaction]:
    """Case-insensitive substring match on title or notes; empty text keeps all."""
    if not text:
        return list(collection)
    needle = text.casefold()
    return [
        t for t in collection
        if needle in t.title.casefold() or needle in t.notes.casefold()
    ]


def apply_filters(
    collection: Iterable[Transaction],
    type_: Optional[TransactionType] = None,
    category: Optional[Category] = None,
    search: str = "",
) -> list[Transaction]:
    filtered = filter_by_type(collection, type_)
    filtered = filter_by_category(filtered, category)
    return filter_by_search(filtered, search)


def filter_by_month(
    collection: Iterable[Transaction],
    reference: datetime | date,
    tz: tzinfo | None = None,
) -> list[Transaction]:
    return [t for t in collection if same_month(t.date, reference, tz)]


def group_by_day(
    collection: Iterable[Transaction], tz: tzinfo | None = None
) -> dict[date, list[Transaction]]:
    """Bucket records by calendar day. Buckets appear in order of first
    occurrence and keep the input order inside each bucket."""
    groups: dict[date, list[Transaction]] = {}
    for t in collection:
        groups.setdefault(local_date(t.date, tz), []).append(t)
    return groups


def sort_by_date(
    collection: Iterable[Transaction], descending: bool = True
) -> list[Transaction]:
    """Order by point in time. Records with equal times keep their input order."""
    return sorted(collection, key=lambda t: instant(t.date), reverse=descending)


def recent(collection: Iterable[Transaction], limit: int = 5) -> list[Transaction]:
    """The newest `limit` records, newest first."""
    if limit <= 0:
        return []
    return sort_by_date(collection)[:limit]
