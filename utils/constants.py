APP_NAME = "Money Tracker"
APP_WIDTH = 1100
APP_HEIGHT = 720

DATA_FILE = "transactions.json"
DB_FILE = "money_tracker.db"
BACKENDS = ["json", "sqlite", "memory"]
DEFAULT_BACKEND = "json"
APPEARANCE_MODES = ["system", "light", "dark"]

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
TREND_MONTHS = 6
RECENT_TRANSACTIONS = 5
EXPORT_VERSION = 1

TYPE_COLORS = {
    "Income":  "#4CAF50",
    "Expense": "#F44336",
}

CATEGORY_COLORS = {
    "Food":           "#FF9800",
    "Transportation": "#2196F3",
    "Shopping":       "#E91E63",
    "Entertainment":  "#9C27B0",
    "Bills":          "#F44336",
    "Healthcare":     "#4CAF50",
    "Education":      "#3F51B5",
    "Salary":         "#3EB489",
    "Freelance":      "#00BCD4",
    "Investment":     "#FFEB3B",
    "Other":          "#888888",
}
