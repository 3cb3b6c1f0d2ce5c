import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.storage import open_storage
from services.transaction_service import TransactionService
from services.report_service import ReportService
from services.data_service import DataService
from ui.app_window import AppWindow
from utils.app_config import get_appearance_mode, get_backend, get_data_folder, get_setting
from utils.logging_setup import configure_logging, get_logger

logger = get_logger("money_tracker.main")


def main():
    configure_logging(get_setting("log_level"))

    # Failures before the window exists are replayed as a banner once it is up.
    startup_failures: list[str] = []
    app: AppWindow | None = None

    def on_storage_error(operation: str, exc: Exception) -> None:
        if app is None:
            startup_failures.append(operation)
        else:
            app.show_storage_error(operation)

    # ── Storage ──────────────────────────────────────────────────────────────
    backend = get_backend()
    data_folder = get_data_folder()
    logger.info("Opening %s storage in %s", backend, data_folder or os.getcwd())
    store = open_storage(backend, data_folder, on_error=on_storage_error)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(store, on_error=on_storage_error)
    tx_svc.initialize()
    report_svc = ReportService(tx_svc)
    data_svc = DataService(tx_svc)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(get_appearance_mode())
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        report_service=report_svc,
        data_service=data_svc,
        startup_failures=startup_failures,
    )

    def on_close():
        tx_svc.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
