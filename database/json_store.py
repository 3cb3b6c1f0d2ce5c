import json
import os
from pathlib import Path
from typing import Optional

from database.codec import decode_transactions, encode_transactions
from database.persistence import ErrorHook, PersistenceStore
from models.transaction import Transaction


class JsonFileStore(PersistenceStore):
    """The whole collection as one JSON array in a single file."""

    def __init__(self, path: str | os.PathLike, on_error: Optional[ErrorHook] = None):
        super().__init__(on_error)
        self.path = Path(path)

    def read(self) -> list[Transaction]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return decode_transactions(data)

    def write(self, transactions: list[Transaction]) -> None:
        """Atomic write via .tmp + os.replace()."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(encode_transactions(transactions), f, indent=2)
            os.replace(tmp, self.path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
