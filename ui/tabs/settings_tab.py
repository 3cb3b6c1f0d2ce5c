import json
import customtkinter as ctk
from tkinter import filedialog, messagebox

from services.data_service import DataService
from services.errors import DecodeError
from utils.app_config import (
    get_appearance_mode, get_backend, get_data_folder,
    set_appearance_mode, set_backend, set_data_folder,
)
from utils.constants import APPEARANCE_MODES, BACKENDS


_DEFAULT_FOLDER = "(default: current folder)"
_RESTART_TEXT = "Restart the app for the change to take effect."


class SettingsTab(ctk.CTkFrame):
    """Settings tab: storage backend and folder, export/import, appearance."""

    def __init__(
        self,
        master,
        data_service: DataService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._data_svc = data_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_storage_section(scroll)
        self._build_export_import_section(scroll)
        self._build_appearance_section(scroll)

    def refresh(self):
        """Re-read config and update displayed values."""
        self._backend_var.set(get_backend())
        self._folder_var.set(get_data_folder() or _DEFAULT_FOLDER)
        self._appearance_var.set(get_appearance_mode().title())

    # ── Section 1: Storage ────────────────────────────────────────────────────

    def _build_storage_section(self, parent):
        section = self._make_section(parent, "Storage", row=0)
        section.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(section, text="Backend:", anchor="e", width=90).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._backend_var = ctk.StringVar(value=get_backend())
        ctk.CTkComboBox(
            section, values=BACKENDS, variable=self._backend_var,
            width=140, state="readonly", command=self._on_backend_change,
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Folder:", anchor="e", width=90).grid(
            row=1, column=0, padx=(8, 4), pady=4, sticky="e"
        )
        self._folder_var = ctk.StringVar(value=get_data_folder() or _DEFAULT_FOLDER)
        ctk.CTkEntry(
            section, textvariable=self._folder_var, state="readonly", width=340,
        ).grid(row=1, column=1, padx=4, pady=4, sticky="ew")

        ctk.CTkButton(
            section, text="Browse…", width=90, command=self._browse_folder,
        ).grid(row=1, column=2, padx=4)

        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._reset_folder,
        ).grid(row=1, column=3, padx=(4, 8))

        self._restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800",
            font=ctk.CTkFont(size=11), anchor="w",
        )
        self._restart_label.grid(row=2, column=0, columnspan=4, sticky="w", padx=8, pady=(0, 6))

    def _on_backend_change(self, backend: str):
        set_backend(backend)
        self._restart_label.configure(text=_RESTART_TEXT)

    def _browse_folder(self):
        path = filedialog.askdirectory(title="Choose data folder")
        if path:
            set_data_folder(path)
            self._folder_var.set(path)
            self._restart_label.configure(text=_RESTART_TEXT)

    def _reset_folder(self):
        set_data_folder(None)
        self._folder_var.set(_DEFAULT_FOLDER)
        self._restart_label.configure(text=_RESTART_TEXT)

    # ── Section 2: Export / Import ────────────────────────────────────────────

    def _build_export_import_section(self, parent):
        section = self._make_section(parent, "Export / Import", row=1)

        self._io_status_var = ctk.StringVar()

        btn_frame = ctk.CTkFrame(section, fg_color="transparent")
        btn_frame.grid(row=0, column=0, sticky="w", padx=8, pady=6)

        ctk.CTkButton(
            btn_frame, text="Export as JSON", width=130,
            command=self._export_json,
        ).pack(side="left", padx=4)

        ctk.CTkButton(
            btn_frame, text="Import JSON…", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._import_json,
        ).pack(side="left", padx=4)

        ctk.CTkLabel(
            section,
            textvariable=self._io_status_var,
            text_color="#4CAF50",
            font=ctk.CTkFont(size=11),
            anchor="w",
        ).grid(row=1, column=0, sticky="w", padx=8, pady=(0, 6))

    def _export_json(self):
        path = filedialog.asksaveasfilename(
            title="Export as JSON",
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            data = self._data_svc.export_json()
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            self._io_status_var.set(f"Exported to {path}")
        except OSError as e:
            messagebox.showerror("Export Failed", str(e))

    def _import_json(self):
        path = filedialog.askopenfilename(
            title="Import JSON",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            messagebox.showerror("Import Failed", f"Could not read file:\n{e}")
            return

        mode = self._ask_import_mode()
        if not mode:
            return

        try:
            stats = self._data_svc.import_json(data, mode)
        except DecodeError as e:
            messagebox.showerror("Import Failed", str(e))
            return
        self._notify_refresh("full")
        self._io_status_var.set(self._format_stats(stats))

    def _ask_import_mode(self) -> str | None:
        dlg = _ImportModeDialog(self.winfo_toplevel())
        self.wait_window(dlg)
        return dlg.mode

    def _format_stats(self, stats: dict) -> str:
        parts = [f"{v} {k}" for k, v in stats.items() if v > 0]
        return "Imported: " + ", ".join(parts) if parts else "Nothing new imported."

    # ── Section 3: Appearance ─────────────────────────────────────────────────

    def _build_appearance_section(self, parent):
        section = self._make_section(parent, "Appearance", row=2)

        self._appearance_var = ctk.StringVar(value=get_appearance_mode().title())
        ctk.CTkSegmentedButton(
            section,
            values=[m.title() for m in APPEARANCE_MODES],
            variable=self._appearance_var,
            command=self._on_appearance_change,
        ).grid(row=0, column=0, padx=8, pady=6, sticky="w")

    def _on_appearance_change(self, value: str):
        mode = value.lower()
        set_appearance_mode(mode)
        ctk.set_appearance_mode(mode)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer,
            text=title,
            font=ctk.CTkFont(size=14, weight="bold"),
            anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner


class _ImportModeDialog(ctk.CTkToplevel):
    """Modal asking whether an import merges into or replaces the collection."""

    def __init__(self, master):
        super().__init__(master)
        self.mode: str | None = None

        self.title("Choose Import Mode")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self,
            text="How should existing transactions be handled?",
            font=ctk.CTkFont(size=13),
            wraplength=280,
        ).grid(row=0, column=0, padx=24, pady=(20, 8), sticky="ew")

        ctk.CTkButton(
            self, text="Merge: add new transactions",
            command=lambda: self._choose("merge"),
        ).grid(row=1, column=0, padx=24, pady=4, sticky="ew")

        ctk.CTkButton(
            self, text="Replace: wipe and restore",
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._choose("replace"),
        ).grid(row=2, column=0, padx=24, pady=(4, 8), sticky="ew")

        ctk.CTkButton(
            self, text="Cancel",
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).grid(row=3, column=0, padx=24, pady=(0, 16), sticky="ew")

        self.transient(master)
        self.grab_set()

    def _choose(self, mode: str):
        self.mode = mode
        self.destroy()
