import math
from typing import Optional
from database.db_manager import DatabaseManager
from database.errors import InvalidArgument
from models.summary import Summary
from models.transaction import Transaction
from utils.constants import INCOME_CATEGORIES
from utils.currency import has_whole_cents
from utils.date_helpers import normalize_date

_INCOME_KEYS = frozenset(name.casefold() for name in INCOME_CATEGORIES)


def is_income_category(category: str) -> bool:
    return (category or "").casefold() in _INCOME_KEYS


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["Id"],
            date=row["Date"],
            category=row["Category"],
            amount=float(row["Amount"]),
            notes=row["Notes"] or "",
        )

    def _validate(self, date, category: str, amount) -> tuple[str, float]:
        """Return (ISO date, amount); raise InvalidArgument on bad input."""
        try:
            value = float(amount)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Amount is not a number: {amount!r}") from e
        if not math.isfinite(value) or value <= 0:
            raise InvalidArgument("Amount must be greater than 0.")
        if not has_whole_cents(value):
            raise InvalidArgument("Amount cannot have more than 2 decimal places.")
        value = round(value, 2)
        date_str = normalize_date(date)
        if date_str is None:
            raise InvalidArgument(f"Invalid date: {date!r}. Use YYYY-MM-DD.")
        if not category or not category.strip():
            raise InvalidArgument("Category cannot be empty.")
        return date_str, value

    def add(self, date, category: str, amount: float, notes: str = "") -> int:
        date_str, value = self._validate(date, category, amount)
        with self._db.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO Transactions(Date, Category, Amount, Notes) VALUES (?, ?, ?, ?)",
                (date_str, category.strip(), value, notes or ""),
            )
            return cursor.lastrowid

    def get_all(self) -> list[Transaction]:
        with self._db.connect() as conn:
            rows = conn.execute(
                "SELECT Id, Date, Category, Amount, Notes FROM Transactions"
                " ORDER BY Date DESC, Id DESC"
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT Id, Date, Category, Amount, Notes FROM Transactions WHERE Id = ?",
                (tx_id,),
            ).fetchone()
        return self._row_to_model(row) if row else None

    def update(self, tx_id: int, date, category: str, amount: float, notes: str = "") -> bool:
        """Replace every mutable field. Returns False (no error) if tx_id does not exist."""
        date_str, value = self._validate(date, category, amount)
        with self._db.connect() as conn:
            cursor = conn.execute(
                "UPDATE Transactions SET Date=?, Category=?, Amount=?, Notes=? WHERE Id=?",
                (date_str, category.strip(), value, notes or "", tx_id),
            )
            return cursor.rowcount > 0

    def delete(self, tx_id: int) -> bool:
        """Returns False (no error) if tx_id does not exist."""
        with self._db.connect() as conn:
            cursor = conn.execute("DELETE FROM Transactions WHERE Id = ?", (tx_id,))
            return cursor.rowcount > 0

    def count_by_category(self, name: str) -> int:
        with self._db.connect() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM Transactions WHERE Category = ? COLLATE NOCASE",
                (name.strip(),),
            ).fetchone()[0]

    def get_summary(self) -> Summary:
        """Single scan; each row is income iff its category is in INCOME_CATEGORIES.

        Stored amounts are whole cents, so rounding the exact float sum to two
        decimals gives the sum of the rows.
        """
        income: list[float] = []
        expenses: list[float] = []
        with self._db.connect() as conn:
            for row in conn.execute("SELECT Category, Amount FROM Transactions"):
                if is_income_category(row["Category"]):
                    income.append(row["Amount"])
                else:
                    expenses.append(row["Amount"])
        return Summary(
            total_income=round(math.fsum(income), 2),
            total_expenses=round(math.fsum(expenses), 2),
        )
