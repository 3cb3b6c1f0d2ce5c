from datetime import datetime

from models.category import Category
from models.transaction import Transaction, TransactionType


def make_tx(
    id: str,
    amount: float,
    type_: TransactionType = TransactionType.EXPENSE,
    category: Category = Category.FOOD,
    date: datetime = datetime(2024, 3, 1, 12, 0),
    title: str = "",
    notes: str = "",
) -> Transaction:
    return Transaction(
        id=id,
        amount=amount,
        title=title or f"tx {id}",
        category=category,
        date=date,
        type=type_,
        notes=notes,
    )
