"""Tests for schema bootstrap and connection handling."""

import sqlite3

import pytest

from database.db_manager import DatabaseManager
from database.errors import StorageError, StorageUnavailable
from database.transaction_dao import TransactionDAO
from utils.constants import DEFAULT_CATEGORIES


def _table_names(db):
    with db.connect() as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return [r["name"] for r in rows]


class TestInitialize:
    """Schema creation and default seeding."""

    def test_creates_both_tables(self, db):
        """Transactions and Categories exist after initialize()."""
        tables = _table_names(db)
        assert "Transactions" in tables
        assert "Categories" in tables

    def test_initialize_twice_keeps_data(self, db, tx_dao):
        """A second initialize() neither duplicates tables nor drops rows."""
        tx_dao.add("2024-01-05", "Salary", 50000, "")
        db.initialize()
        assert _table_names(db).count("Transactions") == 1
        assert len(tx_dao.get_all()) == 1

    def test_seeds_default_categories_once(self, db):
        """Defaults are inserted on first start only."""
        db.initialize()
        with db.connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM Categories").fetchone()[0]
        assert count == len(DEFAULT_CATEGORIES)

    def test_deleted_defaults_are_not_reseeded(self, db, category_dao):
        """Categories removed by the user stay removed after a restart."""
        for cat in category_dao.get_all():
            category_dao.delete(cat.id)
        db.initialize()
        assert category_dao.get_all() == []

    def test_adds_icon_column_to_older_schema(self, tmp_path):
        """A Categories table without Icon is migrated in place."""
        path = tmp_path / "old.db"
        conn = sqlite3.connect(path)
        conn.execute(
            "CREATE TABLE Categories (Id INTEGER PRIMARY KEY AUTOINCREMENT,"
            " Name TEXT NOT NULL, Type TEXT NOT NULL)"
        )
        conn.execute("INSERT INTO Categories(Name, Type) VALUES ('Rent', 'Expense')")
        conn.commit()
        conn.close()

        manager = DatabaseManager(str(path))
        manager.initialize()
        with manager.connect() as conn:
            cols = {row[1] for row in conn.execute("PRAGMA table_info(Categories)")}
            rows = conn.execute("SELECT Name, Icon FROM Categories").fetchall()
        assert "Icon" in cols
        assert [(r["Name"], r["Icon"]) for r in rows] == [("Rent", "")]

    def test_in_folder_uses_fixed_file_name(self, tmp_path):
        """in_folder() points at finance.db inside the folder."""
        manager = DatabaseManager.in_folder(str(tmp_path))
        assert manager.db_path == str(tmp_path / "finance.db")


class TestStorageUnavailable:
    """Failures to open the backing file."""

    def test_missing_folder(self, tmp_path):
        """A path inside a folder that does not exist is rejected."""
        manager = DatabaseManager(str(tmp_path / "nope" / "finance.db"))
        with pytest.raises(StorageUnavailable):
            manager.initialize()

    def test_path_is_a_directory(self, tmp_path):
        """SQLite cannot open a directory as a database."""
        target = tmp_path / "finance.db"
        target.mkdir()
        manager = DatabaseManager(str(target))
        with pytest.raises(StorageUnavailable):
            manager.initialize()

    def test_unavailable_is_a_storage_error(self):
        """StorageUnavailable travels on the fatal StorageError channel."""
        assert issubclass(StorageUnavailable, StorageError)


class TestConnect:
    """Scoped connection per operation."""

    def test_connection_closed_after_block(self, db):
        """The yielded connection cannot be used once the block exits."""
        with db.connect() as conn:
            conn.execute("SELECT 1")
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")

    def test_sqlite_errors_become_storage_errors(self, db):
        """Driver errors are re-raised as StorageError."""
        with pytest.raises(StorageError):
            with db.connect() as conn:
                conn.execute("SELECT * FROM NoSuchTable")

    def test_rolls_back_on_error(self, db):
        """Work done before an exception is not committed."""
        with pytest.raises(RuntimeError):
            with db.connect() as conn:
                conn.execute(
                    "INSERT INTO Transactions(Date, Category, Amount, Notes)"
                    " VALUES ('2024-01-01', 'Gift', 10, '')"
                )
                raise RuntimeError("boom")
        assert TransactionDAO(db).get_all() == []
