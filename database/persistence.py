from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional, Protocol

from database.codec import decode_transactions, encode_transactions
from models.transaction import Transaction
from utils.logging_setup import get_logger

logger = get_logger("money_tracker.persistence")

# Called with ("load" | "save", exception) whenever a failure is swallowed.
ErrorHook = Callable[[str, Exception], None]


class TransactionPersistence(Protocol):
    def load(self) -> list[Transaction]: ...

    def save(self, transactions: Iterable[Transaction]) -> None: ...


def report_failure(
    hook: Optional[ErrorHook], source: str, operation: str, exc: Exception
) -> None:
    """Log a swallowed failure and pass it to the diagnostic hook, if any."""
    logger.warning("%s: %s failed: %s", source, operation, exc)
    if hook is None:
        return
    try:
        hook(operation, exc)
    except Exception:
        logger.exception("%s: error hook raised", source)


class PersistenceStore(ABC):
    """Best-effort load/save on top of read()/write(), which may raise.

    load() never raises and returns [] when nothing is stored or the stored
    data cannot be decoded. save() never raises either; failures go to the
    log and to on_error.
    """

    def __init__(self, on_error: Optional[ErrorHook] = None):
        self._on_error = on_error

    @abstractmethod
    def read(self) -> list[Transaction]:
        ...

    @abstractmethod
    def write(self, transactions: list[Transaction]) -> None:
        ...

    def load(self) -> list[Transaction]:
        try:
            return self.read()
        except Exception as e:
            report_failure(self._on_error, type(self).__name__, "load", e)
            return []

    def save(self, transactions: Iterable[Transaction]) -> None:
        try:
            self.write(list(transactions))
        except Exception as e:
            report_failure(self._on_error, type(self).__name__, "save", e)

    def close(self) -> None:
        pass


class MemoryStore(PersistenceStore):
    """Keeps encoded records in memory; nothing touches the disk."""

    def __init__(self, records: list[dict] | None = None, on_error: Optional[ErrorHook] = None):
        super().__init__(on_error)
        self.records: list[dict] = list(records or [])
        self.save_count = 0

    def read(self) -> list[Transaction]:
        return decode_transactions(self.records)

    def write(self, transactions: list[Transaction]) -> None:
        self.records = encode_transactions(transactions)
        self.save_count += 1
