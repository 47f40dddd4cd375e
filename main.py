import argparse
import os
import sys
from tkinter import messagebox

import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.errors import StorageError
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO

from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.tracker_controller import TrackerController

from ui.app_window import AppWindow
from utils.app_config import get_data_folder, get_setting, set_data_folder, set_setting
from utils.constants import APP_NAME, ACTIVITY_LOG_LIMIT, LOG_FILE
from utils.date_helpers import DATE_FORMAT_OPTIONS
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Launcher options; values given here are saved to the config file."""
    parser = argparse.ArgumentParser(description=APP_NAME)
    parser.add_argument(
        "--data-folder",
        help="Folder holding finance.db and logs.txt",
    )
    parser.add_argument("--currency", help="Currency symbol shown next to amounts")
    parser.add_argument("--date-format", choices=DATE_FORMAT_OPTIONS)
    parser.add_argument("--appearance", choices=["system", "light", "dark"])
    return parser.parse_args(argv)


def apply_args(args: argparse.Namespace) -> None:
    if args.data_folder:
        set_data_folder(os.path.abspath(os.path.expanduser(args.data_folder)))
    if args.currency:
        set_setting("currency_symbol", args.currency)
    if args.date_format:
        set_setting("date_format", args.date_format)
    if args.appearance:
        set_setting("appearance_mode", args.appearance)


def main(argv=None) -> int:
    apply_args(parse_args(argv))

    # ── Bootstrap: read data folder from pre-DB config ───────────────────────
    data_folder = get_data_folder()
    activity_log = configure_logging(
        os.path.join(data_folder, LOG_FILE), capacity=ACTIVITY_LOG_LIMIT
    )

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(get_setting("appearance_mode"))
    ctk.set_default_color_theme("blue")
    currency_symbol = get_setting("currency_symbol")
    date_format = get_setting("date_format")

    try:
        # ── Database ─────────────────────────────────────────────────────────
        db = DatabaseManager.in_folder(data_folder)
        db.initialize()

        # ── DAOs ─────────────────────────────────────────────────────────────
        tx_dao = TransactionDAO(db)
        category_dao = CategoryDAO(db)

        # ── Services ─────────────────────────────────────────────────────────
        tx_svc = TransactionService(tx_dao)
        category_svc = CategoryService(category_dao, tx_dao)
        report_svc = ReportService(tx_dao)
        controller = TrackerController(
            tx_svc, category_svc, report_svc, currency_symbol=currency_symbol,
        )

        # ── Launch UI ────────────────────────────────────────────────────────
        app = AppWindow(
            controller=controller,
            activity_log=activity_log,
            currency_symbol=currency_symbol,
            date_format=date_format,
        )
    except StorageError as e:
        logger.exception("Error initializing application: %s", e)
        messagebox.showerror(APP_NAME, f"Error initializing application.\n\n{e}")
        return 1

    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
