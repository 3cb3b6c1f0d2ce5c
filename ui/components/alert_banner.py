import customtkinter as ctk


class AlertBanner(ctk.CTkFrame):
    """Dismissible colored strip for notices that must not block the window."""

    def __init__(self, master, message: str, color: str = "#FF9800",
                 action_text: str | None = None, action_cmd=None, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", justify="left", wraplength=860, padx=10, pady=6,
        ).grid(row=0, column=0, sticky="ew")

        if action_text and action_cmd:
            ctk.CTkButton(
                self, text=action_text, width=70, height=24,
                fg_color="transparent", border_width=1, border_color="white",
                text_color="white", command=action_cmd,
            ).grid(row=0, column=1, padx=2)

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent", text_color="white",
            command=self.destroy,
        ).grid(row=0, column=2, padx=(2, 4))
