import os
from typing import Optional

from database.db_manager import DatabaseManager
from database.json_store import JsonFileStore
from database.persistence import ErrorHook, MemoryStore, PersistenceStore
from database.transaction_dao import TransactionDAO
from utils.constants import BACKENDS, DATA_FILE


def open_storage(
    backend: str = "json",
    data_folder: str | None = None,
    on_error: Optional[ErrorHook] = None,
) -> PersistenceStore:
    """Build the persistence backend named in the config.

    Files go to data_folder when set, otherwise to the working directory.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage backend: {backend}")
    if backend == "memory":
        return MemoryStore(on_error=on_error)
    if backend == "sqlite":
        return TransactionDAO(DatabaseManager.open_in_folder(data_folder), on_error=on_error)
    path = os.path.join(data_folder, DATA_FILE) if data_folder else DATA_FILE
    return JsonFileStore(path, on_error=on_error)
