import customtkinter as ctk
from models.transaction import TransactionType
from services.transaction_service import TransactionService
from services.report_service import ReportService
from services.data_service import DataService
from ui.components.alert_banner import AlertBanner
from ui.components.transaction_form import TransactionForm
from ui.tabs.home_tab import HomeTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.statistics_tab import StatisticsTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"home", "transactions", "statistics"},
    "settings":    {"settings"},
    "full":        {"home", "transactions", "statistics", "settings"},
}

_OPERATION_MESSAGES = {
    "load": "Saved transactions could not be loaded. Starting with an empty list.",
    "save": "Your latest change could not be saved to disk.",
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        report_service: ReportService,
        data_service: DataService,
        startup_failures: list[str] | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._report_svc = report_service
        self._data_svc = data_service

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()

        for operation in startup_failures or []:
            self.after(300, lambda op=operation: self.show_storage_error(op))

    # ── Header ───────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=16, weight="bold"),
        ).pack(side="left", padx=12, pady=8)

        ctk.CTkButton(
            bar, text="+ Add Transaction", width=140,
            command=lambda: self.open_add_form(TransactionType.EXPENSE),
        ).pack(side="right", padx=12)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ["Home", "Transactions", "Statistics", "Settings"]:
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._home_tab = HomeTab(
            self._tabview.tab("Home"),
            tx_service=self._tx_svc,
            report_service=self._report_svc,
            on_add=self.open_add_form,
        )
        self._home_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transactions"),
            tx_service=self._tx_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._statistics_tab = StatisticsTab(
            self._tabview.tab("Statistics"),
            report_service=self._report_svc,
        )
        self._statistics_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            data_service=self._data_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Forms ────────────────────────────────────────────────────────────────
    def open_add_form(self, type_: TransactionType):
        form = TransactionForm(self, self._tx_svc, initial_type=type_)
        self.wait_window(form)
        if form.saved:
            self.notify_tabs_refresh("transaction")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "home"         in tabs: self._home_tab.refresh()
        if "transactions" in tabs: self._transactions_tab.refresh()
        if "statistics"   in tabs: self._statistics_tab.refresh()
        if "settings"     in tabs: self._settings_tab.refresh()

    # ── Banners ──────────────────────────────────────────────────────────────
    def show_storage_error(self, operation: str):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        banner = AlertBanner(
            self._banner_frame,
            message=_OPERATION_MESSAGES.get(operation, f"Storage {operation} failed."),
            color="#F44336",
            action_text="Settings",
            action_cmd=lambda: self._tabview.set("Settings"),
        )
        banner.pack(fill="x", pady=2)
