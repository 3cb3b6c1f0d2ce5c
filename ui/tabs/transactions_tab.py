import customtkinter as ctk
from models.category import Category
from models.transaction import Transaction, TransactionType
from services import query
from services.transaction_service import TransactionService
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import TYPE_COLORS
from utils.currency import format_currency, format_transaction_amount
from utils.date_helpers import format_date


_MAX_RENDERED_ROWS = 100
_ALL = "All"


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        notify_refresh,   # callable
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._notify_refresh = notify_refresh

        self._type_var = ctk.StringVar(value=_ALL)
        self._cat_var = ctk.StringVar(value=_ALL)
        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_filter_bar()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        bar.grid_columnconfigure(2, weight=1)

        ctk.CTkSegmentedButton(
            bar,
            values=[_ALL] + [t.value for t in TransactionType],
            variable=self._type_var,
            command=lambda _: self._load(),
            width=220,
        ).grid(row=0, column=0, padx=8, pady=6)

        ctk.CTkComboBox(
            bar,
            values=[_ALL] + [c.value for c in Category],
            variable=self._cat_var,
            command=lambda _: self._load(),
            width=150,
            state="readonly",
        ).grid(row=0, column=1, padx=8)

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search…", width=180,
        ).grid(row=0, column=2, padx=8, sticky="e")

        ctk.CTkButton(
            bar, text="+ Add", width=80, command=self._open_add_form,
        ).grid(row=0, column=3, padx=(0, 8))

    # ── Grouped list ─────────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _current_filters(self) -> dict:
        type_f = self._type_var.get()
        cat_f = self._cat_var.get()
        return {
            "type_": None if type_f == _ALL else TransactionType(type_f),
            "category": None if cat_f == _ALL else Category(cat_f),
            "search": self._search_var.get(),
        }

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        matches = query.apply_filters(self._tx_svc.all(), **self._current_filters())
        if not matches:
            ctk.CTkLabel(
                self._scroll, text="No transactions found.", text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        groups = query.group_by_day(matches)
        grid_row = 0
        rendered = 0
        for day in sorted(groups, reverse=True):
            if rendered >= _MAX_RENDERED_ROWS:
                break
            ctk.CTkLabel(
                self._scroll, text=format_date(day), anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=grid_row, column=0, sticky="ew", padx=4, pady=(8, 2))
            grid_row += 1
            for tx in query.sort_by_date(groups[day]):
                if rendered >= _MAX_RENDERED_ROWS:
                    break
                self._add_row(grid_row, rendered, tx)
                grid_row += 1
                rendered += 1

        if len(matches) > rendered:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {rendered} of {len(matches)} transactions. Use filters or search to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=grid_row, column=0, pady=8)

    def _add_row(self, grid_row: int, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=grid_row, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(row, text=str(tx.category), width=120, anchor="w").grid(
            row=0, column=0, padx=(8, 4), pady=4
        )
        text = tx.title if not tx.notes else f"{tx.title}  ({tx.notes})"
        ctk.CTkLabel(row, text=text, anchor="w").grid(row=0, column=1, padx=4, sticky="ew")
        ctk.CTkLabel(
            row, text=format_transaction_amount(tx), width=100, anchor="e",
            text_color=TYPE_COLORS[tx.type.value],
        ).grid(row=0, column=2, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=3, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._open_edit_form(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._delete_tx(t),
        ).pack(side="left")

    def _open_add_form(self):
        type_f = self._type_var.get()
        initial = TransactionType.EXPENSE if type_f == _ALL else TransactionType(type_f)
        form = TransactionForm(self.winfo_toplevel(), self._tx_svc, initial_type=initial)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _open_edit_form(self, tx: Transaction):
        form = TransactionForm(self.winfo_toplevel(), self._tx_svc, transaction=tx)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _delete_tx(self, tx: Transaction):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Transaction",
            f"Delete \"{tx.title}\" ({tx.type.value.lower()} of {format_currency(tx.amount)})?",
        )
        if dlg.result:
            self._tx_svc.delete(tx)
            self._notify_refresh("transaction")
