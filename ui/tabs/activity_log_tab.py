import customtkinter as ctk
from utils.logger import ActivityLogHandler


class ActivityLogTab(ctk.CTkFrame):
    """Read-only view of the in-memory activity log."""

    def __init__(self, master, activity_log: ActivityLogHandler, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._log = activity_log

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, text="Activity Log", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)
        ctk.CTkButton(
            bar, text="Clear", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._clear,
        ).pack(side="right", padx=8, pady=6)

        self._text = ctk.CTkTextbox(self, wrap="word", font=ctk.CTkFont(family="Courier", size=12))
        self._text.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)

        for line in self._log.lines:
            self._append(line)
        self._log.subscribe(self._append)
        self.bind("<Destroy>", self._on_destroy, add="+")

    def _append(self, line: str):
        self._text.configure(state="normal")
        self._text.insert("end", line + "\n")
        self._text.see("end")
        self._text.configure(state="disabled")

    def _clear(self):
        self._log.clear()
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.configure(state="disabled")

    def _on_destroy(self, event):
        if event.widget is self:
            self._log.unsubscribe(self._append)
