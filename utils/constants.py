APP_NAME = "Personal Finance Tracker"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "finance.db"
LOG_FILE = "logs.txt"
DATE_FORMAT = "%Y-%m-%d"
ACTIVITY_LOG_LIMIT = 500

CATEGORY_TYPES = ["Income", "Expense"]

# Matched case-insensitively against Transaction.category
INCOME_CATEGORIES = ("Salary", "Bonus", "Investment", "Gift", "Other Income")

DEFAULT_CATEGORIES = [
    {"name": "Salary",        "type": "Income",  "icon": "💼"},
    {"name": "Bonus",         "type": "Income",  "icon": "🎉"},
    {"name": "Investment",    "type": "Income",  "icon": "📈"},
    {"name": "Gift",          "type": "Income",  "icon": "🎁"},
    {"name": "Other Income",  "type": "Income",  "icon": "💰"},
    {"name": "Groceries",     "type": "Expense", "icon": "🛒"},
    {"name": "Rent",          "type": "Expense", "icon": "🏠"},
    {"name": "Utilities",     "type": "Expense", "icon": "💡"},
    {"name": "Transport",     "type": "Expense", "icon": "🚌"},
    {"name": "Healthcare",    "type": "Expense", "icon": "💊"},
    {"name": "Entertainment", "type": "Expense", "icon": "🎬"},
    {"name": "Other",         "type": "Expense", "icon": "📦"},
]

TYPE_COLORS = {
    "Income":  "#4CAF50",
    "Expense": "#F44336",
}

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
}
