import customtkinter as ctk
from models.category import Category
from services.tracker_controller import TrackerController
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import CATEGORY_TYPES, TYPE_COLORS


class CategoriesTab(ctk.CTkFrame):
    """Income and Expense categories in separate sections, with usage counts."""

    def __init__(
        self,
        master,
        controller: TrackerController,
        notify_refresh,
        show_error,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._ctrl = controller
        self._notify_refresh = notify_refresh
        self._show_error = show_error

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        toolbar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        self._count_label = ctk.CTkLabel(
            toolbar, text="", text_color="gray60", font=ctk.CTkFont(size=12),
        )
        self._count_label.pack(side="left", padx=12, pady=8)
        ctk.CTkButton(
            toolbar, text="+ Add Category", command=lambda: self._open_form(None),
        ).pack(side="right", padx=8, pady=6)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def refresh(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        categories = self._ctrl.category_choices()
        self._count_label.configure(
            text=f"{len(categories)} categor{'y' if len(categories) == 1 else 'ies'}"
        )
        if not categories:
            ctk.CTkLabel(
                self._scroll,
                text="No categories yet. Use '+ Add Category' to create one.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        row = 0
        for type_ in CATEGORY_TYPES:
            members = [c for c in categories if c.type == type_]
            ctk.CTkLabel(
                self._scroll,
                text=f"{type_}  ({len(members)})",
                text_color=TYPE_COLORS.get(type_, "#888888"),
                font=ctk.CTkFont(size=14, weight="bold"),
                anchor="w",
            ).grid(row=row, column=0, sticky="w", padx=6, pady=(10 if row else 0, 4))
            row += 1
            if not members:
                ctk.CTkLabel(
                    self._scroll, text="None", text_color="gray60", anchor="w",
                ).grid(row=row, column=0, sticky="w", padx=16, pady=(0, 6))
                row += 1
            for cat in members:
                self._category_row(row, cat)
                row += 1

    def _category_row(self, row: int, cat: Category):
        frame = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        frame.grid(row=row, column=0, sticky="ew", padx=4, pady=2)
        frame.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(frame, text=cat.icon, width=36, font=ctk.CTkFont(size=16)).grid(
            row=0, column=0, padx=(10, 0), pady=6
        )
        ctk.CTkLabel(
            frame, text=cat.name, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, padx=8, sticky="w")

        used = self._ctrl.category_usage(cat.name)
        ctk.CTkLabel(
            frame,
            text=f"{used} transaction{'' if used == 1 else 's'}",
            width=110, anchor="e", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=0, column=2, padx=8)

        ctk.CTkButton(
            frame, text="Edit", width=56, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_form(c),
        ).grid(row=0, column=3, padx=(0, 4))
        ctk.CTkButton(
            frame, text="Delete", width=64, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat, n=used: self._on_delete(c, n),
        ).grid(row=0, column=4, padx=(0, 10))

    def _open_form(self, cat: Category | None):
        form = CategoryForm(self.winfo_toplevel(), self._ctrl, category=cat)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _on_delete(self, cat: Category, used: int):
        message = f"Delete the '{cat.name}' category?"
        if used:
            message += (
                f"\n\n{used} transaction{'s' if used != 1 else ''} will keep the "
                f"'{cat.name}' label, but it won't appear in the category list."
            )
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Category",
            message=message,
            details=[("Name", cat.label), ("Type", cat.type)],
            confirm_text="Delete",
        )
        if not dlg.result:
            return
        result = self._ctrl.delete_category(cat.id)
        if not result.ok:
            self._show_error(result.message, severity="warning")
        self._notify_refresh("category")
