import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no confirmation for destructive actions. Result via .result."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        details: list[tuple[str, str]] | None = None,
        confirm_text: str = "Confirm",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)

        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        row = 1
        if details:
            box = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=6)
            box.grid(row=row, column=0, padx=20, pady=(0, 12), sticky="ew")
            for i, (label, value) in enumerate(details):
                ctk.CTkLabel(box, text=f"{label}:", text_color="gray60", anchor="e").grid(
                    row=i, column=0, padx=(10, 6), pady=2, sticky="e"
                )
                ctk.CTkLabel(box, text=value, anchor="w").grid(
                    row=i, column=1, padx=(0, 10), pady=2, sticky="w"
                )
            row += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=row, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._close,
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._on_confirm,
        ).pack(side="left")

        self.protocol("WM_DELETE_WINDOW", self._close)
        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

    def _on_confirm(self):
        self.result = True
        self.destroy()

    def _close(self):
        self.destroy()
