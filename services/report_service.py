from database.transaction_dao import TransactionDAO, is_income_category
from models.summary import Summary


class ReportService:
    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def get_summary(self) -> Summary:
        return self._tx_dao.get_summary()

    def get_category_breakdown(self) -> list[dict]:
        """Return [{category, kind, total}, ...] sorted by total descending, for the bar chart."""
        totals: dict[str, dict] = {}
        for tx in self._tx_dao.get_all():
            key = tx.category.casefold()
            entry = totals.setdefault(key, {
                "category": tx.category,
                "kind": "Income" if is_income_category(tx.category) else "Expense",
                "total": 0.0,
            })
            entry["total"] += tx.amount
        rows = list(totals.values())
        for row in rows:
            row["total"] = round(row["total"], 2)
        rows.sort(key=lambda r: (-r["total"], r["category"].casefold()))
        return rows
