from datetime import datetime
from typing import Iterable, Optional

from database.persistence import ErrorHook, TransactionPersistence, report_failure
from models.category import Category
from models.transaction import Transaction, TransactionType, categories_for
from services.errors import InvalidInputError
from utils.logging_setup import get_logger

logger = get_logger("money_tracker.store")


class TransactionService:
    """The authoritative in-memory transaction collection.

    Records keep insertion order. Every mutation writes the full collection
    through to the persistence backend; persistence failures are logged and
    handed to on_error, never raised. The service does no locking, so callers
    must serialize mutations themselves.
    """

    def __init__(
        self,
        persistence: TransactionPersistence,
        on_error: Optional[ErrorHook] = None,
    ):
        self._persistence = persistence
        self._on_error = on_error
        self._transactions: list[Transaction] = []

    # ── Lifecycle ────────────────────────────────────────────────────────────
    def initialize(self) -> None:
        try:
            loaded = list(self._persistence.load())
        except Exception as e:
            report_failure(self._on_error, "TransactionService", "load", e)
            loaded = []
        self._transactions = loaded
        logger.info("Loaded %d transactions", len(loaded))

    def close(self) -> None:
        close = getattr(self._persistence, "close", None)
        if callable(close):
            close()

    # ── Reads ────────────────────────────────────────────────────────────────
    def all(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == tx_id), None)

    def __len__(self) -> int:
        return len(self._transactions)

    # ── Mutations ────────────────────────────────────────────────────────────
    def add(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)
        logger.debug("Added transaction %s", transaction.id)
        self._persist()

    def update(self, transaction: Transaction) -> bool:
        """Replace the first record with the same id in place.

        An unknown id is ignored and nothing is persisted.
        """
        for index, existing in enumerate(self._transactions):
            if existing.id == transaction.id:
                self._transactions[index] = transaction
                logger.debug("Updated transaction %s", transaction.id)
                self._persist()
                return True
        logger.debug("Update ignored, no transaction %s", transaction.id)
        return False

    def delete(self, transaction: Transaction) -> int:
        """Remove every record with the same id; returns how many went."""
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.id != transaction.id]
        removed = before - len(self._transactions)
        logger.debug("Deleted %d record(s) with id %s", removed, transaction.id)
        self._persist()
        return removed

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        self._transactions = list(transactions)
        logger.debug("Replaced collection, now %d records", len(self._transactions))
        self._persist()

    # ── Form helpers (validate, then mutate) ─────────────────────────────────
    def create(
        self,
        amount: float,
        title: str,
        category: Category,
        type_: TransactionType,
        date: datetime | None = None,
        notes: str = "",
    ) -> Transaction:
        title = title.strip()
        self._validate(amount, title, category, type_)
        tx = Transaction.new(
            amount=amount,
            title=title,
            category=category,
            type_=type_,
            date=date,
            notes=notes.strip(),
        )
        self.add(tx)
        return tx

    def revise(self, transaction: Transaction, **changes) -> Transaction:
        if "title" in changes:
            changes["title"] = changes["title"].strip()
        if "notes" in changes:
            changes["notes"] = changes["notes"].strip()
        updated = transaction.replace(**changes)
        self._validate(updated.amount, updated.title, updated.category, updated.type)
        self.update(updated)
        return updated

    def _validate(self, amount: float, title: str, category: Category, type_: TransactionType):
        if not isinstance(type_, TransactionType):
            raise InvalidInputError(f"Invalid type: {type_}")
        if not isinstance(category, Category):
            raise InvalidInputError(f"Invalid category: {category}")
        if not amount > 0:
            raise InvalidInputError("Amount must be positive.")
        if not title:
            raise InvalidInputError("Title cannot be empty.")
        if category not in categories_for(type_):
            raise InvalidInputError(
                f"{category.value} is not an {type_.value.lower()} category."
            )

    def _persist(self) -> None:
        try:
            self._persistence.save(list(self._transactions))
        except Exception as e:
            report_failure(self._on_error, "TransactionService", "save", e)
