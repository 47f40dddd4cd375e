from datetime import date
from models.summary import Summary
from models.transaction import Transaction
from database.errors import NotFound
from database.transaction_dao import TransactionDAO
from utils.date_helpers import parse_date


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO):
        self._dao = tx_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get(self, tx_id: int) -> Transaction:
        tx = self._dao.get_by_id(tx_id)
        if tx is None:
            raise NotFound(f"Transaction {tx_id} does not exist.")
        return tx

    def get_summary(self) -> Summary:
        return self._dao.get_summary()

    def add(self, date: str, category: str, amount: float, notes: str = "") -> Transaction:
        tx_id = self._dao.add(date, category, amount, (notes or "").strip())
        return self.get(tx_id)

    def update(
        self, tx_id: int, date: str, category: str, amount: float, notes: str = ""
    ) -> Transaction:
        if not self._dao.update(tx_id, date, category, amount, (notes or "").strip()):
            raise NotFound(f"Transaction {tx_id} no longer exists.")
        return self.get(tx_id)

    def delete(self, tx_id: int):
        if not self._dao.delete(tx_id):
            raise NotFound(f"Transaction {tx_id} no longer exists.")

    @staticmethod
    def filter(
        transactions: list[Transaction],
        keyword: str = "",
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Transaction]:
        """Keyword matches category or notes (case-insensitive); date bounds are inclusive."""
        keyword = (keyword or "").strip().casefold()
        result = []
        for tx in transactions:
            if keyword and keyword not in tx.category.casefold() and keyword not in tx.notes.casefold():
                continue
            if date_from or date_to:
                d = parse_date(tx.date)
                if d is None:
                    continue
                if date_from and d < date_from:
                    continue
                if date_to and d > date_to:
                    continue
            result.append(tx)
        return result
