from datetime import date, datetime

from services import aggregation, query
from services.aggregation import TrendBucket
from services.transaction_service import TransactionService
from utils.constants import CATEGORY_COLORS, TREND_MONTHS
from utils.date_helpers import format_date, now


class ReportService:
    """Runs the aggregation functions over the store's current snapshot."""

    def __init__(self, tx_service: TransactionService):
        self._tx_svc = tx_service

    def get_summary(self, reference: datetime | date | None = None) -> dict:
        ref = reference or now()
        transactions = self._tx_svc.all()
        income = aggregation.monthly_income(transactions, ref)
        expense = aggregation.monthly_expense(transactions, ref)
        return {
            "balance": aggregation.total_balance(transactions),
            "income": income,
            "expense": expense,
            "net": income - expense,
        }

    def get_monthly_chart_data(
        self, months: int = TREND_MONTHS, reference: datetime | date | None = None
    ) -> list[TrendBucket]:
        """Return [(month, income, expense), ...] oldest first for the bar chart."""
        return aggregation.monthly_trend(self._tx_svc.all(), reference or now(), months)

    def get_category_breakdown(self) -> list[dict]:
        """Return [{category, total, percentage, color_hex}, ...] for the pie chart."""
        return [
            {
                "category": share.category,
                "total": share.total,
                "percentage": share.percentage,
                "color_hex": CATEGORY_COLORS.get(share.category.value, "#888888"),
            }
            for share in aggregation.category_shares(self._tx_svc.all())
        ]

    def export_csv(self, month: datetime | date | None = None) -> list[list[str]]:
        """Return rows suitable for CSV export, oldest first."""
        transactions = self._tx_svc.all()
        if month is not None:
            transactions = query.filter_by_month(transactions, month)
        header = ["Date", "Type", "Category", "Title", "Amount", "Notes", "ID"]
        rows = [header]
        for tx in query.sort_by_date(transactions, descending=False):
            rows.append([
                format_date(tx.date),
                tx.type.value,
                tx.category.value,
                tx.title,
                f"{tx.amount:.2f}",
                tx.notes,
                tx.id,
            ])
        return rows
