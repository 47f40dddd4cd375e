import customtkinter as ctk
from database.transaction_dao import is_income_category
from models.transaction import Transaction
from services.tracker_controller import TrackerController
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.date_picker import DatePickerWidget
from utils.constants import TYPE_COLORS
from utils.currency import format_currency
from utils.date_helpers import format_display_date


_MAX_RENDERED_ROWS = 100


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        controller: TrackerController,
        notify_refresh,   # callable(scope)
        show_error,       # callable(message, severity=...)
        currency_symbol: str = "₹",
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctrl = controller
        self._notify_refresh = notify_refresh
        self._show_error = show_error
        self._symbol = currency_symbol
        self._date_format = date_format

        self._search_var = ctk.StringVar()
        self._status_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_status()
        self._build_header()
        self._build_list()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search category or notes…", width=200,
        ).grid(row=0, column=0, padx=(8, 4), pady=6)

        ctk.CTkLabel(bar, text="From:").grid(row=0, column=1, padx=(8, 2))
        self._from_picker = DatePickerWidget(bar, date_format=self._date_format)
        self._from_picker.grid(row=0, column=2, padx=2)

        ctk.CTkLabel(bar, text="To:").grid(row=0, column=3, padx=(8, 2))
        self._to_picker = DatePickerWidget(bar, date_format=self._date_format)
        self._to_picker.grid(row=0, column=4, padx=2)

        ctk.CTkButton(bar, text="🔍 Filter", width=80, command=self._on_filter).grid(
            row=0, column=5, padx=(8, 2)
        )
        ctk.CTkButton(
            bar, text="Clear", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._on_clear_filter,
        ).grid(row=0, column=6, padx=2)

        ctk.CTkButton(
            bar, text="+ Add Transaction", width=130, command=self._open_add_form,
        ).grid(row=0, column=7, padx=(16, 8))

    def _build_status(self):
        ctk.CTkLabel(
            self, textvariable=self._status_var, anchor="w",
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=0, sticky="ew", padx=12, pady=(2, 0))

    def _on_filter(self):
        result = self._ctrl.apply_filter(
            self._search_var.get(),
            self._from_picker.get(),
            self._to_picker.get(),
        )
        if not result.ok:
            self._show_error(result.message, severity="warning")
        self._load()

    def _on_clear_filter(self):
        self._search_var.set("")
        self._from_picker.set("")
        self._to_picker.set("")
        self._ctrl.clear_filter()
        self._load()

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("ID", 40), ("Date", 90), ("Category", 150), ("Notes", 260),
                ("Amount", 110), ("Actions", 100)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    # ── Scrollable list ──────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        rows = self._ctrl.visible_transactions
        total = len(self._ctrl.transactions)
        if self._ctrl.is_filtered:
            self._status_var.set(f"Showing {len(rows)} of {total} transactions (filtered)")
        else:
            self._status_var.set(f"{total} transaction{'s' if total != 1 else ''}")

        if not rows:
            ctk.CTkLabel(
                self._scroll, text="No transactions to show.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions — use the filter to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        ctk.CTkLabel(row, text=str(tx.id), width=40, anchor="w", text_color="gray60").grid(
            row=0, column=0, padx=4, pady=4
        )
        ctk.CTkLabel(
            row, text=format_display_date(tx.date, self._date_format), width=90, anchor="w"
        ).grid(row=0, column=1, padx=4)
        ctk.CTkLabel(row, text=tx.category, width=150, anchor="w").grid(
            row=0, column=2, padx=4
        )
        ctk.CTkLabel(row, text=tx.notes or "—", width=260, anchor="w").grid(
            row=0, column=3, padx=4
        )

        income = is_income_category(tx.category)
        ctk.CTkLabel(
            row,
            text=f"{'+' if income else '-'}{format_currency(tx.amount, self._symbol)}",
            width=110, anchor="e",
            text_color=TYPE_COLORS["Income" if income else "Expense"],
        ).grid(row=0, column=4, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=5, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._open_edit_form(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._delete_tx(t),
        ).pack(side="left")

    # ── Actions ──────────────────────────────────────────────────────────────
    def _open_add_form(self):
        self._ctrl.cancel_edit()
        form = TransactionForm(
            self.winfo_toplevel(), self._ctrl,
            currency_symbol=self._symbol,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _open_edit_form(self, tx: Transaction):
        result = self._ctrl.begin_edit(tx.id)
        if not result.ok:
            self._show_error(result.message, severity="warning")
            self._notify_refresh("transaction")
            return
        form = TransactionForm(
            self.winfo_toplevel(), self._ctrl,
            transaction=result.value,
            currency_symbol=self._symbol,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.stale_message:
            self._show_error(form.stale_message, severity="warning")
        if form.saved:
            self._notify_refresh("transaction")

    def _delete_tx(self, tx: Transaction):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Transaction",
            "Are you sure you want to delete this transaction?",
            details=[
                ("Date", tx.date),
                ("Category", tx.category),
                ("Amount", format_currency(tx.amount, self._symbol)),
            ],
            confirm_text="Delete",
        )
        if not dlg.result:
            return
        result = self._ctrl.delete_transaction(tx.id)
        if not result.ok:
            self._show_error(result.message, severity="warning")
        self._notify_refresh("transaction")
