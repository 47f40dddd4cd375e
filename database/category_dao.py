from typing import Optional
from database.db_manager import DatabaseManager
from database.errors import InvalidArgument
from models.category import Category
from utils.constants import CATEGORY_TYPES


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["Id"],
            name=row["Name"],
            type=row["Type"],
            icon=row["Icon"] or "",
        )

    def _validate(self, name: str, type_: str) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidArgument("Category name cannot be empty.")
        if type_ not in CATEGORY_TYPES:
            raise InvalidArgument(f"Invalid category type: {type_}")
        return name

    def get_all(self) -> list[Category]:
        """Storage order (by id). Display ordering belongs to CategoryService."""
        with self._db.connect() as conn:
            rows = conn.execute(
                "SELECT Id, Name, Type, Icon FROM Categories ORDER BY Id"
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: int) -> Optional[Category]:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT Id, Name, Type, Icon FROM Categories WHERE Id = ?", (category_id,)
            ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, name: str, type_: str, icon: str = "") -> int:
        name = self._validate(name, type_)
        with self._db.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO Categories(Name, Type, Icon) VALUES (?, ?, ?)",
                (name, type_, (icon or "").strip()),
            )
            return cursor.lastrowid

    def update(self, category_id: int, name: str, type_: str, icon: str = "") -> bool:
        name = self._validate(name, type_)
        with self._db.connect() as conn:
            cursor = conn.execute(
                "UPDATE Categories SET Name=?, Type=?, Icon=? WHERE Id=?",
                (name, type_, (icon or "").strip(), category_id),
            )
            return cursor.rowcount > 0

    def delete(self, category_id: int) -> bool:
        """Transactions referencing the name are left untouched."""
        with self._db.connect() as conn:
            cursor = conn.execute("DELETE FROM Categories WHERE Id = ?", (category_id,))
            return cursor.rowcount > 0
