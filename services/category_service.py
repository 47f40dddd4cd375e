from database.category_dao import CategoryDAO
from database.errors import InvalidArgument, NotFound
from database.transaction_dao import TransactionDAO
from models.category import Category
from utils.constants import CATEGORY_TYPES


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, tx_dao: TransactionDAO):
        self._dao = category_dao
        self._tx_dao = tx_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_grouped(self) -> list[Category]:
        """Income categories first, then Expense; each group sorted by name."""
        order = {t: i for i, t in enumerate(CATEGORY_TYPES)}
        return sorted(
            self._dao.get_all(),
            key=lambda c: (order.get(c.type, len(order)), c.name.casefold()),
        )

    def find_by_name(self, name: str) -> Category | None:
        key = (name or "").strip().casefold()
        return next((c for c in self._dao.get_all() if c.name.casefold() == key), None)

    def is_known(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def usage_count(self, name: str) -> int:
        return self._tx_dao.count_by_category(name)

    def create(self, name: str, type_: str, icon: str = "") -> Category:
        name = (name or "").strip()
        self._check_unique(name, type_)
        category_id = self._dao.create(name, type_, icon)
        return self._dao.get_by_id(category_id)

    def update(self, category_id: int, name: str, type_: str, icon: str = "") -> Category:
        name = (name or "").strip()
        self._check_unique(name, type_, exclude_id=category_id)
        if not self._dao.update(category_id, name, type_, icon):
            raise NotFound(f"Category {category_id} no longer exists.")
        return self._dao.get_by_id(category_id)

    def delete(self, category_id: int) -> Category:
        cat = self._dao.get_by_id(category_id)
        if cat is None:
            raise NotFound(f"Category {category_id} no longer exists.")
        self._dao.delete(category_id)
        return cat

    def _check_unique(self, name: str, type_: str, exclude_id: int | None = None):
        if not name:
            raise InvalidArgument("Category name cannot be empty.")
        for c in self._dao.get_all():
            if c.id != exclude_id and c.type == type_ and c.name.casefold() == name.casefold():
                raise InvalidArgument(f"A {type_.lower()} category named '{name}' already exists.")
