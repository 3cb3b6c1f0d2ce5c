from models.transaction import Transaction, TransactionType


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56' or '-$12.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_transaction_amount(tx: Transaction, symbol: str = "$") -> str:
    """'+$12.00' for income, '-$12.00' for expenses."""
    sign = "+" if tx.type == TransactionType.INCOME else "-"
    return f"{sign}{symbol}{tx.amount:,.2f}"
