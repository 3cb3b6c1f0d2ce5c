import customtkinter as ctk
from models.transaction import TransactionType
from services import query
from services.report_service import ReportService
from services.transaction_service import TransactionService
from utils.constants import RECENT_TRANSACTIONS, TYPE_COLORS
from utils.currency import format_currency, format_transaction_amount
from utils.date_helpers import format_date, friendly_month, today


class HomeTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        report_service: ReportService,
        on_add,   # callable(TransactionType)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._report_svc = report_service
        self._on_add = on_add

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_balance_card()
        self._build_month_cards()
        self._build_quick_actions()
        self._build_recent()
        self._load()

    def refresh(self):
        self._load()

    def _build_balance_card(self):
        card = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=12)
        card.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 6))
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text="Total Balance", font=ctk.CTkFont(size=13), text_color="gray60"
        ).grid(row=0, column=0, pady=(14, 0))
        self._balance_label = ctk.CTkLabel(
            card, text="", font=ctk.CTkFont(size=30, weight="bold")
        )
        self._balance_label.grid(row=1, column=0, pady=(0, 4))
        self._month_label = ctk.CTkLabel(card, text="", text_color="gray60")
        self._month_label.grid(row=2, column=0, pady=(0, 14))

    def _build_month_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=6)
        self._card_frame.grid_columnconfigure((0, 1), weight=1)

    def _build_quick_actions(self):
        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=2, column=0, sticky="ew", padx=16, pady=6)
        bar.grid_columnconfigure((0, 1), weight=1)
        ctk.CTkButton(
            bar, text="+ Add Income",
            fg_color=TYPE_COLORS["Income"], hover_color="#388E3C",
            command=lambda: self._on_add(TransactionType.INCOME),
        ).grid(row=0, column=0, padx=(0, 6), sticky="ew")
        ctk.CTkButton(
            bar, text="- Add Expense",
            fg_color=TYPE_COLORS["Expense"], hover_color="#C62828",
            command=lambda: self._on_add(TransactionType.EXPENSE),
        ).grid(row=0, column=1, padx=(6, 0), sticky="ew")

    def _build_recent(self):
        self._recent_frame = ctk.CTkScrollableFrame(
            self, label_text="Recent Transactions", height=220
        )
        self._recent_frame.grid(row=3, column=0, sticky="nsew", padx=16, pady=(6, 12))
        self._recent_frame.grid_columnconfigure(1, weight=1)

    def _load(self):
        summary = self._report_svc.get_summary()
        balance = summary["balance"]
        self._balance_label.configure(
            text=format_currency(balance),
            text_color=TYPE_COLORS["Income"] if balance >= 0 else TYPE_COLORS["Expense"],
        )
        self._month_label.configure(text=friendly_month(today()))

        for w in self._card_frame.winfo_children():
            w.destroy()
        self._make_card(0, "Income This Month", summary["income"], TYPE_COLORS["Income"])
        self._make_card(1, "Expenses This Month", summary["expense"], TYPE_COLORS["Expense"])

        for w in self._recent_frame.winfo_children():
            w.destroy()
        recent = query.recent(self._tx_svc.all(), RECENT_TRANSACTIONS)
        if not recent:
            ctk.CTkLabel(
                self._recent_frame, text="No transactions yet.", text_color="gray60"
            ).pack(pady=20)
            return
        for idx, tx in enumerate(recent):
            bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
            f = ctk.CTkFrame(self._recent_frame, fg_color=bg, corner_radius=4)
            f.pack(fill="x", pady=1)
            f.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(f, text=format_date(tx.date), width=85, anchor="w").grid(
                row=0, column=0, padx=6, pady=3
            )
            ctk.CTkLabel(f, text=f"{tx.title}  ·  {tx.category}", anchor="w").grid(
                row=0, column=1, padx=4, sticky="ew"
            )
            ctk.CTkLabel(
                f, text=format_transaction_amount(tx),
                text_color=TYPE_COLORS[tx.type.value], anchor="e", width=100,
            ).grid(row=0, column=2, padx=6)

    def _make_card(self, col, label, value, color):
        card = ctk.CTkFrame(self._card_frame, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card, text=format_currency(value),
            font=ctk.CTkFont(size=20, weight="bold"), text_color=color,
        ).grid(row=1, column=0, pady=(0, 12), padx=16)
