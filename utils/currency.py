import math

DEFAULT_SYMBOL = "₹"


def format_currency(amount: float, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format a float as currency string, e.g. '₹1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_log_amount(amount: float, symbol: str = DEFAULT_SYMBOL) -> str:
    """Plain two-decimal amount for activity lines, e.g. '₹1200.00'."""
    return f"{symbol}{amount:.2f}"


def has_whole_cents(amount: float) -> bool:
    """True when amount has at most two decimal places, e.g. 12.5 but not 0.004."""
    return math.isclose(amount, round(amount, 2), rel_tol=0.0, abs_tol=1e-9)
