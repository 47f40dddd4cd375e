"""Tests for the service layer: filtering, display ordering, reports."""

from datetime import date

import pytest

from database.errors import InvalidArgument, NotFound
from models.transaction import Transaction
from services.transaction_service import TransactionService


def _tx(id_, day, category, notes=""):
    return Transaction(id=id_, date=day, category=category, amount=10, notes=notes)


class TestTransactionService:
    """Strict wrappers and the in-memory filter."""

    def test_add_returns_model(self, tx_service):
        """add() hands back the stored row."""
        tx = tx_service.add("2024-01-10", "Groceries", 1200, "  weekly ")
        assert tx.id > 0
        assert tx.notes == "weekly"

    def test_update_missing_raises_not_found(self, tx_service):
        """The service reports what the store silently ignores."""
        with pytest.raises(NotFound):
            tx_service.update(999, "2024-01-10", "Groceries", 1, "")

    def test_delete_missing_raises_not_found(self, tx_service):
        """Deleting an unknown id is reported."""
        with pytest.raises(NotFound):
            tx_service.delete(999)

    def test_get_missing_raises_not_found(self, tx_service):
        """get() never returns None."""
        with pytest.raises(NotFound):
            tx_service.get(42)

    def test_filter_by_keyword_matches_category_or_notes(self):
        """Keyword search is case-insensitive across category and notes."""
        rows = [
            _tx(1, "2024-01-01", "Groceries", "weekly shop"),
            _tx(2, "2024-01-02", "Rent", ""),
            _tx(3, "2024-01-03", "Gift", "from GROCER friend"),
        ]
        result = TransactionService.filter(rows, keyword="grocer")
        assert [t.id for t in result] == [1, 3]

    def test_filter_by_inclusive_date_range(self):
        """Both bounds are inclusive."""
        rows = [_tx(i, f"2024-01-{i:02d}", "Rent") for i in range(1, 6)]
        result = TransactionService.filter(rows, date_from=date(2024, 1, 2), date_to=date(2024, 1, 4))
        assert [t.id for t in result] == [2, 3, 4]

    def test_filter_open_ended(self):
        """Either bound may be omitted."""
        rows = [_tx(i, f"2024-01-{i:02d}", "Rent") for i in range(1, 6)]
        assert [t.id for t in TransactionService.filter(rows, date_from=date(2024, 1, 4))] == [4, 5]
        assert [t.id for t in TransactionService.filter(rows, date_to=date(2024, 1, 1))] == [1]

    def test_filter_without_criteria_returns_everything(self):
        """No keyword and no dates keeps every row."""
        rows = [_tx(1, "2024-01-01", "Rent")]
        assert TransactionService.filter(rows) == rows


class TestCategoryService:
    """Display ordering and uniqueness rules."""

    def test_grouped_income_first_then_by_name(self, category_service):
        """Income block precedes Expense block; each sorted by name."""
        category_service.create("Allowance", "Income")
        category_service.create("Auto", "Expense")
        cats = category_service.get_grouped()
        types = [c.type for c in cats]
        assert types == sorted(types, key=lambda t: 0 if t == "Income" else 1)
        income_names = [c.name for c in cats if c.type == "Income"]
        expense_names = [c.name for c in cats if c.type == "Expense"]
        assert income_names == sorted(income_names, key=str.casefold)
        assert expense_names == sorted(expense_names, key=str.casefold)
        assert income_names[0] == "Allowance"
        assert expense_names[0] == "Auto"

    def test_duplicate_name_within_type_rejected(self, category_service):
        """Same name and type (ignoring case) is refused."""
        with pytest.raises(InvalidArgument):
            category_service.create("salary", "Income")

    def test_same_name_other_type_allowed(self, category_service):
        """Uniqueness is per type."""
        cat = category_service.create("Salary", "Expense")
        assert cat.type == "Expense"

    def test_create_trims_name(self, category_service):
        """Leading/trailing whitespace is dropped."""
        assert category_service.create("  Books  ", "Expense").name == "Books"

    def test_update_may_keep_its_own_name(self, category_service):
        """A category does not clash with itself."""
        cat = category_service.create("Books", "Expense")
        updated = category_service.update(cat.id, "Books", "Expense", "📚")
        assert updated.icon == "📚"

    def test_update_missing_raises(self, category_service):
        """Unknown ids are reported."""
        with pytest.raises(NotFound):
            category_service.update(999, "Nothing", "Expense")

    def test_delete_missing_raises(self, category_service):
        """Unknown ids are reported."""
        with pytest.raises(NotFound):
            category_service.delete(999)

    def test_find_by_name_ignores_case(self, category_service):
        """Lookup is by name, not display text."""
        assert category_service.find_by_name(" groceries ").name == "Groceries"
        assert category_service.is_known("Nope") is False

    def test_usage_count(self, category_service, tx_dao):
        """Counts transactions referencing the name."""
        tx_dao.add("2024-01-01", "Groceries", 5, "")
        assert category_service.usage_count("Groceries") == 1


class TestReportService:
    """Chart data."""

    def test_category_breakdown(self, report_service, tx_dao):
        """Totals per category, largest first, tagged income/expense."""
        tx_dao.add("2024-01-01", "Salary", 1000, "")
        tx_dao.add("2024-01-02", "Groceries", 100, "")
        tx_dao.add("2024-01-03", "Groceries", 50.25, "")
        rows = report_service.get_category_breakdown()
        assert rows == [
            {"category": "Salary", "kind": "Income", "total": 1000},
            {"category": "Groceries", "kind": "Expense", "total": 150.25},
        ]

    def test_summary_passthrough(self, report_service, tx_dao):
        """get_summary() matches the store."""
        tx_dao.add("2024-01-01", "Bonus", 10, "")
        assert report_service.get_summary().total_income == 10
