import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no dialog. Blocks until closed; read the answer from .result."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        confirm_text: str = "Delete",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=340, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            buttons, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            buttons, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close(True),
        ).pack(side="left")

        self.protocol("WM_DELETE_WINDOW", lambda: self._close(False))
        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mx = self.master.winfo_x() + self.master.winfo_width() // 2
        my = self.master.winfo_y() + self.master.winfo_height() // 2
        self.geometry(f"+{mx - self.winfo_width() // 2}+{my - self.winfo_height() // 2}")

    def _close(self, result: bool):
        self.result = result
        self.destroy()
