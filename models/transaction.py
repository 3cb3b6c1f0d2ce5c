import dataclasses
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from models.category import Category, EXPENSE_CATEGORIES, INCOME_CATEGORIES


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Transaction:
    id: str                 # uuid4 string, never reused
    amount: float           # always positive; type decides the sign
    title: str
    category: Category
    date: datetime
    type: TransactionType
    notes: str = ""

    @classmethod
    def new(
        cls,
        amount: float,
        title: str,
        category: Category,
        type_: TransactionType,
        date: Optional[datetime] = None,
        notes: str = "",
    ) -> "Transaction":
        """Build a record with a fresh id; date defaults to now."""
        return cls(
            id=str(uuid.uuid4()),
            amount=amount,
            title=title,
            category=category,
            date=date or datetime.now(),
            type=type_,
            notes=notes,
        )

    def replace(self, **changes) -> "Transaction":
        """Return a copy with the given fields changed. The id is kept."""
        changes.pop("id", None)
        return dataclasses.replace(self, **changes)

    @property
    def signed_amount(self) -> float:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


def categories_for(type_: TransactionType) -> list[Category]:
    """Categories the form offers for the given type, in enumeration order."""
    if type_ == TransactionType.INCOME:
        return list(INCOME_CATEGORIES)
    return list(EXPENSE_CATEGORIES)
