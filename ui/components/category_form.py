import customtkinter as ctk
from models.category import Category
from services.tracker_controller import TrackerController
from utils.constants import CATEGORY_TYPES, DEFAULT_CATEGORIES

ICON_CHOICES = [c["icon"] for c in DEFAULT_CATEGORIES] + ["🍽", "🎓", "✈", "🐾"]


class CategoryForm(ctk.CTkToplevel):
    """Add or edit a category."""

    def __init__(
        self,
        master,
        controller: TrackerController,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._ctrl = controller
        self._category = category
        self.saved = False

        self.title("Edit Category" if category else "New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Name
        ctk.CTkLabel(self, text="Name:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._name_var = ctk.StringVar(value=category.name if category else "")
        self._name_entry = ctk.CTkEntry(self, textvariable=self._name_var, width=220)
        self._name_entry.grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        # Type
        ctk.CTkLabel(self, text="Type:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._type_var = ctk.StringVar(value=category.type if category else "Expense")
        ctk.CTkSegmentedButton(
            self, values=CATEGORY_TYPES, variable=self._type_var,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Icon
        ctk.CTkLabel(self, text="Icon:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._icon_var = ctk.StringVar(value=category.icon if category else "")
        icon_row = ctk.CTkFrame(self, fg_color="transparent")
        icon_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        ctk.CTkEntry(icon_row, textvariable=self._icon_var, width=48).grid(
            row=0, column=0, rowspan=2, padx=(0, 6)
        )
        for i, icon in enumerate(ICON_CHOICES):
            ctk.CTkButton(
                icon_row, text=icon, width=28, height=28,
                fg_color="transparent", hover_color=("gray80", "gray30"),
                command=lambda ic=icon: self._icon_var.set(ic),
            ).grid(row=i // 8, column=1 + i % 8, padx=1, pady=1)
        r += 1

        # Error
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        # Buttons
        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.bind("<Return>", lambda e: self._on_save())
        self.bind("<Escape>", lambda e: self.destroy())
        self.transient(master)
        self.grab_set()
        self._center()
        self._name_entry.focus_set()

    def _on_save(self):
        name = self._name_var.get()
        type_ = self._type_var.get()
        icon = self._icon_var.get()
        if self._category:
            result = self._ctrl.update_category(self._category.id, name, type_, icon)
        else:
            result = self._ctrl.add_category(name, type_, icon)
        if not result.ok:
            self._error_var.set(result.message)
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
