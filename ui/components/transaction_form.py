import customtkinter as ctk
from models.transaction import Transaction
from services.result import NOT_FOUND
from services.tracker_controller import TrackerController
from ui.components.date_picker import DatePickerWidget
from utils.date_helpers import today_str

_SEPARATOR = "──────────"


class TransactionForm(ctk.CTkToplevel):
    """Add or edit a transaction. Validation and saving go through the controller."""

    _last_date: str = today_str()  # reset to today on each app launch

    def __init__(
        self,
        master,
        controller: TrackerController,
        transaction: Transaction | None = None,
        currency_symbol: str = "₹",
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._ctrl = controller
        self._transaction = transaction
        self._date_format = date_format
        self.saved = False
        self.stale_message = ""

        self._editing = controller.is_editing
        self.title("Edit Transaction" if self._editing else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self,
            initial_date=transaction.date if transaction else TransactionForm._last_date,
            date_format=self._date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="w")
        r += 1

        # Category: income names, a separator, then expense names
        self._label("Category:", r)
        values = self._category_values()
        current_cat = ""
        if transaction:
            current_cat = transaction.category
        elif values:
            current_cat = values[0]
        self._cat_var = ctk.StringVar(value=current_cat)
        ctk.CTkComboBox(
            self, values=values, variable=self._cat_var,
            width=220, state="readonly", command=self._on_category_selected,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Amount
        self._label(f"Amount ({currency_symbol}):", r)
        self._amount_var = ctk.StringVar(
            value=f"{transaction.amount:.2f}" if transaction else ""
        )
        ctk.CTkEntry(self, textvariable=self._amount_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Notes
        self._label("Notes:", r)
        self._notes_var = ctk.StringVar(value=transaction.notes if transaction else "")
        ctk.CTkEntry(self, textvariable=self._notes_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._build_footer(r)

        self.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=(16 if row == 0 else 4, 4), sticky="e"
        )

    def _category_values(self) -> list[str]:
        cats = self._ctrl.category_choices()
        income = [c.name for c in cats if c.type == "Income"]
        expense = [c.name for c in cats if c.type == "Expense"]
        if income and expense:
            return income + [_SEPARATOR] + expense
        return income + expense

    def _on_category_selected(self, value: str):
        if value == _SEPARATOR:
            self._cat_var.set("")

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._on_cancel,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame,
            text="💾 Update Transaction" if self._editing else "➕ Add Transaction",
            width=150,
            command=self._on_save,
        ).pack(side="right")

    def _on_save(self):
        result = self._ctrl.submit_transaction(
            self._date_picker.get(),
            self._cat_var.get(),
            self._amount_var.get(),
            self._notes_var.get(),
        )
        if result.error == NOT_FOUND:
            # Row vanished while editing; close so the stale list gets reloaded
            self.stale_message = result.message
            self.saved = True
            self.destroy()
            return
        if not result.ok:
            self._error_var.set(result.message)
            return
        TransactionForm._last_date = self._date_picker.get()
        self.saved = True
        self.destroy()

    def _on_cancel(self):
        self._ctrl.cancel_edit()
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
