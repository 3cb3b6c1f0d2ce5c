"""Derived statistics over a transaction collection.

All functions are pure and total: an empty collection gives zeros or empty
lists, never an error.
"""
from datetime import date, datetime, tzinfo
from typing import Iterable, NamedTuple

from models.category import Category
from models.transaction import Transaction, TransactionType
from services.query import filter_by_month, filter_by_type
from utils.date_helpers import add_months, local_date, month_label, month_start


class CategoryTotal(NamedTuple):
    category: Category
    total: float


class CategoryShare(NamedTuple):
    category: Category
    total: float
    percentage: float   # 0..100 of all expenses


class TrendBucket(NamedTuple):
    month: str          # short month name, e.g. 'Mar'
    income: float
    expense: float

    @property
    def net(self) -> float:
        return self.income - self.expense


def _sum_amounts(collection: Iterable[Transaction]) -> float:
    return sum((t.amount for t in collection), 0.0)


def total_balance(collection: Iterable[Transaction]) -> float:
    return sum((t.signed_amount for t in collection), 0.0)


def total_income(collection: Iterable[Transaction]) -> float:
    return _sum_amounts(filter_by_type(collection, TransactionType.INCOME))


def total_expense(collection: Iterable[Transaction]) -> float:
    return _sum_amounts(filter_by_type(collection, TransactionType.EXPENSE))


def monthly_income(
    collection: Iterable[Transaction],
    reference: datetime | date,
    tz: tzinfo | None = None,
) -> float:
    return total_income(filter_by_month(collection, reference, tz))


def monthly_expense(
    collection: Iterable[Transaction],
    reference: datetime | date,
    tz: tzinfo | None = None,
) -> float:
    return total_expense(filter_by_month(collection, reference, tz))


def monthly_net(
    collection: Iterable[Transaction],
    reference: datetime | date,
    tz: tzinfo | None = None,
) -> float:
    in_month = filter_by_month(collection, reference, tz)
    return total_income(in_month) - total_expense(in_month)


def category_expenses(collection: Iterable[Transaction]) -> list[CategoryTotal]:
    """Expense totals per category, largest first.

    Equal totals keep Category declaration order. Categories without
    expenses are left out.
    """
    totals: dict[Category, float] = {}
    for t in filter_by_type(collection, TransactionType.EXPENSE):
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
    ordered = [CategoryTotal(c, totals[c]) for c in Category if c in totals]
    # sorted() is stable with reverse=True, so ties stay in declaration order
    return sorted(ordered, key=lambda item: item.total, reverse=True)


def category_shares(collection: Iterable[Transaction]) -> list[CategoryShare]:
    totals = category_expenses(collection)
    grand_total = sum((item.total for item in totals), 0.0)
    return [
        CategoryShare(
            item.category,
            item.total,
            item.total / grand_total * 100 if grand_total > 0 else 0.0,
        )
        for item in totals
    ]


def monthly_trend(
    collection: Iterable[Transaction],
    reference: datetime | date,
    month_count: int = 6,
    tz: tzinfo | None = None,
) -> list[TrendBucket]:
    """Income/expense per calendar month for the month_count months ending at
    reference's month, oldest first. Months without records are zeros."""
    records = list(collection)
    if isinstance(reference, datetime):
        reference = local_date(reference, tz)
    first = month_start(reference)
    buckets = []
    for back in range(month_count - 1, -1, -1):
        month = add_months(first, -back)
        in_month = filter_by_month(records, month, tz)
        buckets.append(TrendBucket(
            month_label(month),
            total_income(in_month),
            total_expense(in_month),
        ))
    return buckets
