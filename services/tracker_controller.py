"""
services/tracker_controller.py
------------------------------
Tk-free form controller behind the main window.

Takes raw field text from the UI, validates it into typed arguments,
calls the services and reloads transactions, summary and categories after
every mutation. Expected failures come back as ``Result`` objects; a
``StorageError`` is logged to the error file and re-raised for the UI to
report.
"""

import math
from datetime import date
from typing import Callable

from database.errors import InvalidArgument, NotFound, StorageError
from models.category import Category
from models.summary import Summary
from models.transaction import Transaction
from services.category_service import CategoryService
from services.report_service import ReportService
from services.result import INVALID_ARGUMENT, NOT_FOUND, Result
from services.transaction_service import TransactionService
from utils.currency import DEFAULT_SYMBOL, format_log_amount, has_whole_cents
from utils.date_helpers import parse_date
from utils.logger import get_logger

logger = get_logger(__name__)


class TrackerController:
    def __init__(
        self,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        currency_symbol: str = DEFAULT_SYMBOL,
    ):
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._symbol = currency_symbol

        self.transactions: list[Transaction] = []
        self.visible_transactions: list[Transaction] = []
        self.summary = Summary()
        self.categories: list[Category] = []
        self.editing_id: int | None = None
        self._filter: tuple[str, date | None, date | None] | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def is_filtered(self) -> bool:
        return self._filter is not None

    # ── Loading ──────────────────────────────────────────────────────────────
    def reload(self) -> Result:
        return self._guard("loading data", self._reload)

    def _reload(self) -> Result:
        self.transactions = self._tx_svc.get_all()
        self.summary = self._tx_svc.get_summary()
        self.categories = self._cat_svc.get_grouped()
        self._apply_current_filter()
        return Result.success(self.summary)

    def category_breakdown(self) -> list[dict]:
        return self._query("loading category totals", self._report_svc.get_category_breakdown)

    def category_choices(self) -> list[Category]:
        """Categories in display order: Income first, then Expense, by name."""
        return list(self.categories)

    # ── Transactions ─────────────────────────────────────────────────────────
    def submit_transaction(
        self, date_text: str, category: str, amount_text: str, notes: str = ""
    ) -> Result:
        """Add a transaction, or update the one being edited."""
        return self._guard("saving transaction", self._submit, date_text, category, amount_text, notes)

    def _submit(self, date_text, category, amount_text, notes) -> Result:
        tx_date = self._parse_required_date(date_text)
        category = self._require_category(category)
        amount = self.parse_amount(amount_text)
        notes = (notes or "").strip()
        date_str = tx_date.isoformat()

        if self.editing_id is not None:
            tx_id = self.editing_id
            try:
                tx = self._tx_svc.update(tx_id, date_str, category, amount, notes)
            except NotFound:
                self.editing_id = None
                self._reload()
                raise
            self.editing_id = None
            logger.info(
                "Updated [%s] %s | %s | %s | %s",
                tx.id, tx.date, tx.category, format_log_amount(tx.amount, self._symbol), tx.notes,
            )
        else:
            tx = self._tx_svc.add(date_str, category, amount, notes)
            logger.info(
                "Added | %s | %s | %s | %s",
                tx.date, tx.category, format_log_amount(tx.amount, self._symbol), tx.notes,
            )
        self._reload()
        return Result.success(tx)

    def begin_edit(self, tx_id: int) -> Result:
        return self._guard("editing transaction", self._begin_edit, tx_id)

    def _begin_edit(self, tx_id: int) -> Result:
        tx = self._tx_svc.get(tx_id)
        self.editing_id = tx.id
        logger.info("Editing transaction [%s] - make changes and click Update", tx.id)
        return Result.success(tx)

    def cancel_edit(self):
        if self.editing_id is not None:
            logger.info("Cancelled editing transaction [%s]", self.editing_id)
        self.editing_id = None

    def delete_transaction(self, tx_id: int) -> Result:
        """Call only after the user confirmed the deletion."""
        return self._guard("deleting transaction", self._delete_transaction, tx_id)

    def _delete_transaction(self, tx_id: int) -> Result:
        try:
            tx = self._tx_svc.get(tx_id)
            self._tx_svc.delete(tx_id)
        finally:
            if self.editing_id == tx_id:
                self.editing_id = None
        logger.info(
            "Deleted [%s] %s | %s | %s",
            tx.id, tx.date, tx.category, format_log_amount(tx.amount, self._symbol),
        )
        self._reload()
        return Result.success(tx)

    # ── Filtering ────────────────────────────────────────────────────────────
    def apply_filter(self, keyword: str = "", date_from_text: str = "", date_to_text: str = "") -> Result:
        return self._guard("applying filter", self._apply_filter, keyword, date_from_text, date_to_text)

    def _apply_filter(self, keyword, date_from_text, date_to_text) -> Result:
        if not self.transactions:
            logger.warning("No transactions to filter")
            return Result.success([])
        date_from = self._parse_optional_date(date_from_text, "From date")
        date_to = self._parse_optional_date(date_to_text, "To date")
        if date_from and date_to and date_from > date_to:
            raise InvalidArgument("From date must not be after To date.")
        self._filter = ((keyword or "").strip(), date_from, date_to)
        self._apply_current_filter()
        logger.info(
            "Filtered %d transactions (out of %d)",
            len(self.visible_transactions), len(self.transactions),
        )
        return Result.success(self.visible_transactions)

    def clear_filter(self) -> Result:
        self._filter = None
        self._apply_current_filter()
        logger.info("Filters cleared")
        return Result.success(self.visible_transactions)

    def _apply_current_filter(self):
        if self._filter is None:
            self.visible_transactions = list(self.transactions)
        else:
            self.visible_transactions = self._tx_svc.filter(self.transactions, *self._filter)

    # ── Categories ───────────────────────────────────────────────────────────
    def add_category(self, name: str, type_: str, icon: str = "") -> Result:
        return self._guard("adding category", self._add_category, name, type_, icon)

    def _add_category(self, name, type_, icon) -> Result:
        cat = self._cat_svc.create(name, type_, icon)
        logger.info("Added category | %s (%s)", cat.label, cat.type)
        self._reload()
        return Result.success(cat)

    def update_category(self, category_id: int, name: str, type_: str, icon: str = "") -> Result:
        return self._guard("updating category", self._update_category, category_id, name, type_, icon)

    def _update_category(self, category_id, name, type_, icon) -> Result:
        cat = self._cat_svc.update(category_id, name, type_, icon)
        logger.info("Updated category [%s] %s (%s)", cat.id, cat.label, cat.type)
        self._reload()
        return Result.success(cat)

    def delete_category(self, category_id: int) -> Result:
        """Transactions keep their category label; only the category row goes."""
        return self._guard("deleting category", self._delete_category, category_id)

    def _delete_category(self, category_id: int) -> Result:
        cat = self._cat_svc.delete(category_id)
        logger.info("Deleted category [%s] %s", cat.id, cat.label)
        self._reload()
        return Result.success(cat)

    def category_usage(self, name: str) -> int:
        return self._query("counting category usage", self._cat_svc.usage_count, name)

    # ── Validation ───────────────────────────────────────────────────────────
    def parse_amount(self, amount_text) -> float:
        """Amount field text to a float; accepts thousands separators and a leading symbol."""
        text = str(amount_text or "").strip()
        if not text:
            raise InvalidArgument("Please enter an amount.")
        symbols = (self._symbol, DEFAULT_SYMBOL, "$")
        text = text.replace(",", "")
        for symbol in symbols:
            if symbol and text.startswith(symbol):
                text = text[len(symbol):].strip()
                break
        try:
            amount = float(text)
        except ValueError:
            raise InvalidArgument("Please enter a valid number for amount.") from None
        if not math.isfinite(amount):
            raise InvalidArgument("Please enter a valid number for amount.")
        if amount <= 0:
            raise InvalidArgument("Amount must be greater than 0.")
        if not has_whole_cents(amount):
            raise InvalidArgument("Amount cannot have more than 2 decimal places.")
        return amount

    @staticmethod
    def _parse_required_date(date_text) -> date:
        d = parse_date(str(date_text or ""))
        if d is None:
            raise InvalidArgument("Please select a valid date.")
        return d

    @staticmethod
    def _parse_optional_date(date_text, label: str) -> date | None:
        if not date_text or not str(date_text).strip():
            return None
        d = parse_date(str(date_text))
        if d is None:
            raise InvalidArgument(f"{label} is not a valid date.")
        return d

    def _require_category(self, name: str) -> str:
        if not name or not name.strip():
            raise InvalidArgument("Please select a category.")
        cat = self._cat_svc.find_by_name(name)
        if cat is None:
            raise InvalidArgument(f"Unknown category: {name.strip()}")
        return cat.name

    # ── Error channel ────────────────────────────────────────────────────────
    def _guard(self, action: str, fn: Callable[..., Result], *args) -> Result:
        try:
            return fn(*args)
        except InvalidArgument as e:
            logger.warning("Validation: %s", e)
            return Result.failure(INVALID_ARGUMENT, str(e))
        except NotFound as e:
            logger.warning("Error %s: %s", action, e)
            return Result.failure(NOT_FOUND, str(e))
        except StorageError as e:
            logger.exception("Error %s: %s", action, e)
            raise

    def _query(self, action: str, fn: Callable, *args):
        """Plain reads: no Result wrapping, but storage failures are logged once here."""
        try:
            return fn(*args)
        except StorageError as e:
            logger.exception("Error %s: %s", action, e)
            raise
