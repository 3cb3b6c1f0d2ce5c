"""Shared fixtures.

``app_config`` reads and writes a JSON file under the user's home directory;
the autouse fixture points it at the test's own temporary directory so runs
never touch real settings.
"""
from datetime import datetime
from pathlib import Path

import pytest

from database.persistence import MemoryStore
from models.category import Category
from models.transaction import Transaction, TransactionType
from services.transaction_service import TransactionService
from utils import app_config

from helpers import make_tx


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_dir = tmp_path / "config"
    monkeypatch.setattr(app_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_dir / "config.json")


@pytest.fixture
def scenario() -> list[Transaction]:
    return [
        make_tx("1", 100, TransactionType.INCOME, Category.SALARY, datetime(2024, 3, 1)),
        make_tx("2", 40, TransactionType.EXPENSE, Category.FOOD, datetime(2024, 3, 2)),
        make_tx("3", 20, TransactionType.EXPENSE, Category.FOOD, datetime(2024, 4, 1)),
    ]


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def service(memory_store: MemoryStore) -> TransactionService:
    svc = TransactionService(memory_store)
    svc.initialize()
    return svc
