import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from database.errors import StorageError, StorageUnavailable
from utils.constants import DB_FILE, DEFAULT_CATEGORIES
from utils.logger import get_logger

logger = get_logger(__name__)

# Bumped whenever _seed_defaults learns something new
SCHEMA_VERSION = 1


class DatabaseManager:
    """Owns the finance.db file. Every operation opens its own connection."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE

    @classmethod
    def in_folder(cls, folder: str) -> "DatabaseManager":
        return cls(os.path.join(folder, DB_FILE))

    def _open(self) -> sqlite3.Connection:
        folder = os.path.dirname(os.path.abspath(self.db_path))
        if not os.path.isdir(folder):
            raise StorageUnavailable(f"Data folder does not exist: {folder}")
        if not os.access(folder, os.W_OK):
            raise StorageUnavailable(f"Data folder is not writable: {folder}")
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a fresh connection; commit on success, roll back on error, always close."""
        conn = self._open()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self):
        """Create schema and seed defaults. Safe to call on every startup."""
        try:
            with self.connect() as conn:
                self._create_schema(conn)
                self._migrate_schema(conn)
                self._seed_defaults(conn)
        except StorageUnavailable:
            raise
        except StorageError as e:
            raise StorageUnavailable(f"Cannot initialize database {self.db_path}: {e}") from e
        logger.info("Database ready at %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS Transactions (
                Id        INTEGER PRIMARY KEY AUTOINCREMENT,
                Date      TEXT NOT NULL,
                Category  TEXT NOT NULL,
                Amount    REAL NOT NULL CHECK(Amount > 0),
                Notes     TEXT
            );

            CREATE TABLE IF NOT EXISTS Categories (
                Id    INTEGER PRIMARY KEY AUTOINCREMENT,
                Name  TEXT NOT NULL,
                Type  TEXT NOT NULL CHECK(Type IN ('Income','Expense')),
                Icon  TEXT NOT NULL DEFAULT ''
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date ON Transactions(Date);
        """)

    def _migrate_schema(self, conn: sqlite3.Connection):
        """Idempotent ALTER TABLE for columns added after initial release."""
        cols = {row[1] for row in conn.execute("PRAGMA table_info(Categories)").fetchall()}
        if "Icon" not in cols:
            conn.execute("ALTER TABLE Categories ADD COLUMN Icon TEXT NOT NULL DEFAULT ''")

    def _seed_defaults(self, conn: sqlite3.Connection):
        # user_version records that seeding ran; deleted defaults stay deleted
        version = conn.execute("PRAGMA user_version").fetchone()[0]
        if version >= SCHEMA_VERSION:
            return
        has_categories = conn.execute("SELECT COUNT(*) FROM Categories").fetchone()[0]
        if not has_categories:
            conn.executemany(
                "INSERT INTO Categories(Name, Type, Icon) VALUES (?, ?, ?)",
                [(c["name"], c["type"], c["icon"]) for c in DEFAULT_CATEGORIES],
            )
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
