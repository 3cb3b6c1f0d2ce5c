from datetime import datetime, timezone

from database.codec import encode_transactions
from database.persistence import MemoryStore
from models.category import Category
from models.transaction import TransactionType
from services.report_service import ReportService
from services.transaction_service import TransactionService

from helpers import make_tx


def _report(transactions):
    svc = TransactionService(MemoryStore(encode_transactions(transactions)))
    svc.initialize()
    return ReportService(svc), svc


def test_summary_for_reference_month(scenario):
    report, _ = _report(scenario)
    summary = report.get_summary(datetime(2024, 3, 20))

    assert summary == {"balance": 40, "income": 100, "expense": 40, "net": 60}


def test_summary_follows_store_mutations(scenario):
    report, svc = _report(scenario)
    svc.add(make_tx("4", 10, TransactionType.EXPENSE, Category.BILLS, datetime(2024, 4, 2)))

    summary = report.get_summary(datetime(2024, 4, 5))
    assert summary["balance"] == 30
    assert summary["expense"] == 30
    assert summary["net"] == -30


def test_monthly_chart_data(scenario):
    report, _ = _report(scenario)
    data = report.get_monthly_chart_data(months=3, reference=datetime(2024, 4, 30))

    assert [(d.month, d.income, d.expense) for d in data] == [
        ("Feb", 0, 0),
        ("Mar", 100, 40),
        ("Apr", 0, 20),
    ]


def test_category_breakdown_has_percentages_and_colors():
    report, _ = _report([
        make_tx("a", 30, TransactionType.EXPENSE, Category.FOOD),
        make_tx("b", 90, TransactionType.EXPENSE, Category.SHOPPING),
        make_tx("c", 500, TransactionType.INCOME, Category.SALARY),
    ])
    breakdown = report.get_category_breakdown()

    assert [b["category"] for b in breakdown] == [Category.SHOPPING, Category.FOOD]
    assert [b["percentage"] for b in breakdown] == [75.0, 25.0]
    assert all(b["color_hex"].startswith("#") for b in breakdown)


def test_export_csv_sorted_and_month_filtered(scenario):
    report, _ = _report(list(reversed(scenario)))

    rows = report.export_csv()
    assert rows[0] == ["Date", "Type", "Category", "Title", "Amount", "Notes", "ID"]
    assert [r[6] for r in rows[1:]] == ["1", "2", "3"]
    assert rows[2][:5] == ["2024-03-02", "Expense", "Food", "tx 2", "40.00"]

    april = report.export_csv(datetime(2024, 4, 1))
    assert [r[6] for r in april[1:]] == ["3"]


def test_export_csv_orders_mixed_naive_and_aware_dates():
    report, _ = _report([
        make_tx("late", 3, date=datetime(2024, 3, 20, 9, tzinfo=timezone.utc)),
        make_tx("early", 2, date=datetime(2024, 3, 1, 9)),
    ])

    rows = report.export_csv()

    assert [r[-1] for r in rows[1:]] == ["early", "late"]
