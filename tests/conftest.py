import pytest

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.tracker_controller import TrackerController
from utils.logger import reset_logging


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "finance.db"))
    manager.initialize()
    return manager


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_service(tx_dao):
    return TransactionService(tx_dao)


@pytest.fixture
def category_service(category_dao, tx_dao):
    return CategoryService(category_dao, tx_dao)


@pytest.fixture
def report_service(tx_dao):
    return ReportService(tx_dao)


@pytest.fixture
def controller(tx_service, category_service, report_service):
    ctrl = TrackerController(tx_service, category_service, report_service)
    ctrl.reload()
    return ctrl


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
