import sqlite3
import os
from utils.constants import DB_FILE


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            folder = os.path.dirname(self.db_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema."""
        conn = self.get_connection()
        self._create_schema(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        # position keeps the store's insertion order; id is not unique on purpose
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS transactions (
                position  INTEGER PRIMARY KEY,
                id        TEXT NOT NULL,
                amount    REAL NOT NULL,
                title     TEXT NOT NULL,
                category  TEXT NOT NULL,
                date      TEXT NOT NULL,
                type      TEXT NOT NULL,
                notes     TEXT NOT NULL DEFAULT ''
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_id   ON transactions(id);
            CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date);
        """)

    @staticmethod
    def open_in_folder(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the DB in db_folder, or the CWD."""
        path = os.path.join(db_folder, DB_FILE) if db_folder else DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
