"""Tests for the transaction half of the storage engine."""

from datetime import date

import pytest

from database.errors import InvalidArgument
from database.transaction_dao import is_income_category


class TestAddAndRead:
    """add() followed by get_all()."""

    def test_add_returns_new_unique_ids(self, tx_dao):
        """Each insert gets a distinct store-assigned id."""
        first = tx_dao.add("2024-01-05", "Salary", 50000, "")
        second = tx_dao.add("2024-01-10", "Groceries", 1200, "weekly")
        assert first != second
        stored = {t.id: t for t in tx_dao.get_all()}
        assert stored[second].category == "Groceries"
        assert stored[second].amount == 1200
        assert stored[second].notes == "weekly"
        assert stored[second].date == "2024-01-10"

    def test_accepts_date_objects(self, tx_dao):
        """date instances are stored as ISO text."""
        tx_id = tx_dao.add(date(2024, 3, 1), "Gift", 25.5)
        assert tx_dao.get_by_id(tx_id).date == "2024-03-01"

    def test_notes_default_to_empty(self, tx_dao):
        """Missing notes come back as an empty string."""
        tx_id = tx_dao.add("2024-03-01", "Gift", 10, None)
        assert tx_dao.get_by_id(tx_id).notes == ""

    def test_ordered_by_date_then_id_descending(self, tx_dao):
        """Newest date first; same-day rows newest insert first."""
        a = tx_dao.add("2024-01-05", "Salary", 50000, "")
        b = tx_dao.add("2024-01-10", "Groceries", 1200, "weekly")
        c = tx_dao.add("2024-01-05", "Rent", 800, "")
        assert [t.id for t in tx_dao.get_all()] == [b, c, a]

    def test_get_by_id_missing(self, tx_dao):
        """Unknown ids return None."""
        assert tx_dao.get_by_id(999) is None


class TestValidation:
    """Defense-in-depth checks inside the store."""

    @pytest.mark.parametrize("amount", [0, -5, float("nan"), "abc", None])
    def test_rejects_bad_amount(self, tx_dao, amount):
        """Non-positive or non-numeric amounts are refused and nothing is stored."""
        with pytest.raises(InvalidArgument):
            tx_dao.add("2024-01-05", "Salary", amount, "")
        assert len(tx_dao.get_all()) == 0

    def test_rejects_malformed_date(self, tx_dao):
        """Dates must parse as YYYY-MM-DD."""
        with pytest.raises(InvalidArgument):
            tx_dao.add("05/01/2024", "Salary", 10, "")
        assert len(tx_dao.get_all()) == 0

    def test_rejects_blank_category(self, tx_dao):
        """Category text is required."""
        with pytest.raises(InvalidArgument):
            tx_dao.add("2024-01-05", "  ", 10, "")

    def test_invalid_argument_is_value_error(self):
        """Forms can keep catching ValueError."""
        assert issubclass(InvalidArgument, ValueError)


class TestUpdateAndDelete:
    """Lenient update/delete semantics."""

    def test_update_replaces_fields_of_one_row(self, tx_dao):
        """Only the targeted row changes."""
        keep = tx_dao.add("2024-01-05", "Salary", 50000, "")
        target = tx_dao.add("2024-01-10", "Groceries", 1200, "weekly")
        assert tx_dao.update(target, "2024-02-01", "Rent", 900, "feb") is True

        updated = tx_dao.get_by_id(target)
        assert (updated.date, updated.category, updated.amount, updated.notes) == (
            "2024-02-01", "Rent", 900, "feb",
        )
        untouched = tx_dao.get_by_id(keep)
        assert (untouched.date, untouched.category, untouched.amount) == (
            "2024-01-05", "Salary", 50000,
        )

    def test_update_missing_id_is_noop(self, tx_dao):
        """Updating an unknown id reports False and raises nothing."""
        tx_dao.add("2024-01-05", "Salary", 50000, "")
        assert tx_dao.update(999, "2024-02-01", "Rent", 900, "") is False
        assert [t.category for t in tx_dao.get_all()] == ["Salary"]

    def test_update_validates_amount(self, tx_dao):
        """update() applies the same amount rule as add()."""
        tx_id = tx_dao.add("2024-01-05", "Salary", 50000, "")
        with pytest.raises(InvalidArgument):
            tx_dao.update(tx_id, "2024-01-05", "Salary", 0, "")
        assert tx_dao.get_by_id(tx_id).amount == 50000

    def test_delete_removes_exactly_one_row(self, tx_dao):
        """Row count drops by one and the id is gone."""
        tx_dao.add("2024-01-05", "Salary", 50000, "")
        target = tx_dao.add("2024-01-10", "Groceries", 1200, "weekly")
        before = len(tx_dao.get_all())
        assert tx_dao.delete(target) is True
        remaining = tx_dao.get_all()
        assert len(remaining) == before - 1
        assert target not in [t.id for t in remaining]

    def test_delete_missing_id_is_noop(self, tx_dao):
        """Deleting an unknown id leaves the table unchanged."""
        tx_dao.add("2024-01-05", "Salary", 50000, "")
        before = len(tx_dao.get_all())
        assert tx_dao.delete(12345) is False
        assert len(tx_dao.get_all()) == before


class TestSummary:
    """Income/expense classification."""

    def test_scenario_from_two_rows(self, tx_dao):
        """Salary is income, Groceries is expense."""
        tx_dao.add("2024-01-05", "Salary", 50000, "")
        tx_dao.add("2024-01-10", "Groceries", 1200, "weekly")
        summary = tx_dao.get_summary()
        assert summary.total_income == 50000
        assert summary.total_expenses == 1200
        assert summary.balance == 48800
        assert tx_dao.get_all()[0].category == "Groceries"

    def test_classification_is_case_insensitive(self, tx_dao):
        """'other income' and 'BONUS' count as income."""
        tx_dao.add("2024-01-01", "other income", 100, "")
        tx_dao.add("2024-01-02", "BONUS", 50, "")
        tx_dao.add("2024-01-03", "Freelance", 30, "")
        summary = tx_dao.get_summary()
        assert summary.total_income == 150
        assert summary.total_expenses == 30
        assert summary.balance == 120

    def test_empty_store(self, tx_dao):
        """No rows means all zeros."""
        summary = tx_dao.get_summary()
        assert (summary.total_income, summary.total_expenses, summary.balance) == (0, 0, 0)

    def test_balance_can_go_negative(self, tx_dao):
        """Expenses above income give a negative balance."""
        tx_dao.add("2024-01-01", "Gift", 10, "")
        tx_dao.add("2024-01-02", "Rent", 110.5, "")
        assert tx_dao.get_summary().balance == -100.5

    def test_fractional_amounts_sum_exactly(self, tx_dao):
        """Cent amounts total to the sum of the rows, not an approximation of it."""
        for amount in (0.1, 0.2, 0.7, 12.34):
            tx_dao.add("2024-01-01", "Salary", amount, "")
        for amount in (19.99, 19.99, 19.99, 0.01):
            tx_dao.add("2024-01-02", "Groceries", amount, "")
        summary = tx_dao.get_summary()
        assert summary.total_income == 13.34
        assert summary.total_expenses == 59.98
        assert summary.balance == -46.64

    def test_summary_matches_stored_rows(self, tx_dao):
        """Every stored cent shows up in the totals."""
        tx_dao.add("2024-01-01", "Salary", 0.01, "")
        tx_dao.add("2024-01-02", "Rent", 1234.56, "")
        rows = tx_dao.get_all()
        summary = tx_dao.get_summary()
        assert summary.total_income == sum(t.amount for t in rows if t.category == "Salary") == 0.01
        assert summary.total_expenses == 1234.56

    def test_sub_cent_amount_is_not_stored(self, tx_dao):
        """An amount the totals could not show is refused up front."""
        with pytest.raises(InvalidArgument, match="2 decimal places"):
            tx_dao.add("2024-01-01", "Salary", 0.004, "")
        assert tx_dao.get_all() == []
        assert tx_dao.get_summary().total_income == 0

    @pytest.mark.parametrize("name, expected", [
        ("Salary", True), ("INVESTMENT", True), ("Gift", True),
        (" investment ", False), ("Gifts", False), ("Groceries", False), ("", False),
    ])
    def test_is_income_category(self, name, expected):
        """Exact name match, ignoring case only."""
        assert is_income_category(name) is expected

    def test_count_by_category(self, tx_dao):
        """Counts references by name, ignoring case."""
        tx_dao.add("2024-01-01", "Rent", 10, "")
        tx_dao.add("2024-01-02", "rent", 10, "")
        tx_dao.add("2024-01-03", "Gift", 10, "")
        assert tx_dao.count_by_category("RENT") == 2
