import customtkinter as ctk
from database.errors import StorageError
from services.tracker_controller import TrackerController
from ui.components.alert_banner import AlertBanner
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.activity_log_tab import ActivityLogTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT
from utils.logger import ActivityLogHandler, get_logger

logger = get_logger(__name__)


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "transactions"},
    "category":    {"dashboard", "transactions", "categories"},
    "full":        {"dashboard", "transactions", "categories"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        controller: TrackerController,
        activity_log: ActivityLogHandler,
        currency_symbol: str = "₹",
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._ctrl = controller
        self._activity_log = activity_log
        self._symbol = currency_symbol
        self._date_format = date_format

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()
        self._build_tabs()
        self.report_callback_exception = self._on_callback_exception

        self.notify_tabs_refresh("full")
        logger.info("Application started successfully")

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8, pady=(6, 0))

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Transactions", "Categories", "Activity Log"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            controller=self._ctrl,
            currency_symbol=self._symbol,
            date_format=self._date_format,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transactions"),
            controller=self._ctrl,
            notify_refresh=self.notify_tabs_refresh,
            show_error=self.show_banner,
            currency_symbol=self._symbol,
            date_format=self._date_format,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._categories_tab = CategoriesTab(
            self._tabview.tab("Categories"),
            controller=self._ctrl,
            notify_refresh=self.notify_tabs_refresh,
            show_error=self.show_banner,
        )
        self._categories_tab.grid(row=0, column=0, sticky="nsew")

        self._log_tab = ActivityLogTab(
            self._tabview.tab("Activity Log"),
            activity_log=self._activity_log,
        )
        self._log_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        """Reload controller state once, then redraw the tabs the scope touches."""
        result = self._ctrl.reload()
        if not result.ok:
            self.show_banner(result.message, severity="warning")
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard"    in tabs: self._dashboard_tab.refresh()
        if "transactions" in tabs: self._transactions_tab.refresh()
        if "categories"   in tabs: self._categories_tab.refresh()

    # ── Banners ──────────────────────────────────────────────────────────────
    def show_banner(self, message: str, severity: str = "error"):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        banner = AlertBanner(
            self._banner_frame,
            message=message,
            severity=severity,
            action_text="View Log" if severity == "error" else None,
            action_cmd=lambda: self._tabview.set("Activity Log"),
            auto_hide_ms=None if severity == "error" else 6000,
        )
        banner.pack(fill="x", pady=2)

    def _on_callback_exception(self, exc_type, exc, tb):
        # Storage failures were already written to the error log by the controller
        if isinstance(exc, StorageError):
            self.show_banner(f"Database error: {exc}", severity="error")
            return
        logger.error("Unexpected error: %s", exc, exc_info=(exc_type, exc, tb))
        self.show_banner(f"Unexpected error: {exc}", severity="error")
