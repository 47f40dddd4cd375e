import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.tracker_controller import TrackerController
from database.transaction_dao import is_income_category
from utils.constants import TYPE_COLORS
from utils.currency import format_currency
from utils.date_helpers import format_display_date

_RECENT_ROWS = 10
_CHART_BARS = 10


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        controller: TrackerController,
        currency_symbol: str = "₹",
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctrl = controller
        self._symbol = currency_symbol
        self._date_format = date_format

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_summary_cards()
        self._build_bottom_section()

    def refresh(self):
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure(0, weight=3)
        bottom.grid_columnconfigure(1, weight=2)
        bottom.grid_rowconfigure(0, weight=1)

        chart_outer = ctk.CTkFrame(bottom, fg_color=("gray90", "gray20"), corner_radius=8)
        chart_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            chart_outer, text="Totals by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._ax = self._fig.add_subplot(111)
        self._canvas = FigureCanvasTkAgg(self._fig, master=chart_outer)
        self._canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        self._recent_frame = ctk.CTkScrollableFrame(
            bottom, label_text="Recent Transactions", height=240
        )
        self._recent_frame.grid(row=0, column=1, sticky="nsew", padx=(8, 0))

    def _load(self):
        summary = self._ctrl.summary

        for w in self._card_frame.winfo_children():
            w.destroy()
        balance_color = "#2196F3" if summary.balance >= 0 else "#FF9800"
        for i, (label, value, color) in enumerate([
            ("Income",   summary.total_income,   TYPE_COLORS["Income"]),
            ("Expenses", summary.total_expenses, TYPE_COLORS["Expense"]),
            ("Balance",  summary.balance,        balance_color),
        ]):
            self._make_card(self._card_frame, i, label, value, color)

        for w in self._recent_frame.winfo_children():
            w.destroy()
        recent = self._ctrl.transactions[:_RECENT_ROWS]
        if not recent:
            ctk.CTkLabel(
                self._recent_frame, text="No transactions yet.", text_color="gray60",
            ).pack(pady=20)
        for idx, tx in enumerate(recent):
            bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
            f = ctk.CTkFrame(self._recent_frame, fg_color=bg, corner_radius=4)
            f.pack(fill="x", pady=1)
            f.grid_columnconfigure(1, weight=1)

            income = is_income_category(tx.category)
            ctk.CTkLabel(
                f, text=format_display_date(tx.date, self._date_format), width=85, anchor="w"
            ).grid(row=0, column=0, padx=6, pady=3)
            ctk.CTkLabel(f, text=tx.notes or tx.category, anchor="w").grid(
                row=0, column=1, padx=4, sticky="ew"
            )
            ctk.CTkLabel(
                f, text=f"{'+' if income else '-'}{format_currency(tx.amount, self._symbol)}",
                text_color=TYPE_COLORS["Income" if income else "Expense"],
                anchor="e", width=100,
            ).grid(row=0, column=2, padx=6)

        self.after(50, self._draw_chart)

    def _make_card(self, parent, col, label, value, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        sign = "-" if value < 0 else ""
        ctk.CTkLabel(
            card,
            text=f"{sign}{format_currency(abs(value), self._symbol)}",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)

    def _style_ax(self):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        self._fig.patch.set_facecolor(bg)
        self._ax.set_facecolor(bg)
        self._ax.tick_params(colors=fg, labelsize=8)
        for spine in self._ax.spines.values():
            spine.set_edgecolor(fg)

    def _draw_chart(self):
        ax = self._ax
        ax.clear()
        self._style_ax()

        data = self._ctrl.category_breakdown()[:_CHART_BARS]
        if not data:
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._canvas.draw_idle()
            return

        labels = [d["category"] for d in data]
        x = list(range(len(labels)))
        ax.bar(x, [d["total"] for d in data], color=[TYPE_COLORS[d["kind"]] for d in data])
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=30, ha="right")
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._canvas.draw_idle()
