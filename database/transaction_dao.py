from typing import Optional
from database.codec import decode_transaction, encode_transaction
from database.db_manager import DatabaseManager
from database.persistence import ErrorHook, PersistenceStore
from models.transaction import Transaction


class TransactionDAO(PersistenceStore):
    """SQLite backend. Each save rewrites the whole table in one transaction."""

    def __init__(self, db: DatabaseManager, on_error: Optional[ErrorHook] = None):
        super().__init__(on_error)
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return decode_transaction({key: row[key] for key in row.keys()})

    def read(self) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM transactions ORDER BY position ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def write(self, transactions: list[Transaction]) -> None:
        conn = self._db.get_connection()
        try:
            conn.execute("DELETE FROM transactions")
            conn.executemany(
                """INSERT INTO transactions(position, id, amount, title, category, date, type, notes)
                   VALUES (:position, :id, :amount, :title, :category, :date, :type, :notes)""",
                [
                    {"position": i, **encode_transaction(tx)}
                    for i, tx in enumerate(transactions)
                ],
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def count(self) -> int:
        conn = self._db.get_connection()
        return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]

    def close(self) -> None:
        self._db.close()
