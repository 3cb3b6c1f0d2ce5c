import customtkinter as ctk
from models.category import Category
from models.transaction import Transaction, TransactionType, categories_for
from services.transaction_service import TransactionService
from ui.components.date_picker import DatePickerWidget
from utils.date_helpers import combine_with_time, today


class TransactionForm(ctk.CTkToplevel):
    """Add or edit an income/expense transaction."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        initial_type: TransactionType = TransactionType.EXPENSE,
        transaction: Transaction | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._transaction = transaction
        self.saved = False

        type_ = transaction.type if transaction else initial_type
        self.title("Edit Transaction" if transaction else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._build_form(type_, transaction)

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build_form(self, type_: TransactionType, tx: Transaction | None):
        r = 0

        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=type_.value)
        type_frame = ctk.CTkFrame(self, fg_color="transparent")
        type_frame.grid(row=r, column=1, padx=(0, 16), pady=(12, 4), sticky="w")
        for t in TransactionType:
            ctk.CTkRadioButton(
                type_frame, text=t.value,
                variable=self._type_var, value=t.value,
                command=self._on_type_change,
            ).pack(side="left", padx=4)
        r += 1

        self._label("Title:", r)
        self._title_var = ctk.StringVar(value=tx.title if tx else "")
        ctk.CTkEntry(self, textvariable=self._title_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=f"{tx.amount:.2f}" if tx else "")
        ctk.CTkEntry(self, textvariable=self._amount_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Category:", r)
        self._cat_names = [c.value for c in categories_for(type_)]
        current_cat = tx.category.value if tx else self._cat_names[0]
        self._cat_var = ctk.StringVar(value=current_cat)
        self._cat_combo = ctk.CTkComboBox(
            self, values=self._cat_names,
            variable=self._cat_var, width=220, state="readonly",
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=tx.date.date() if tx else today()
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._label("Notes:", r)
        self._notes_var = ctk.StringVar(value=tx.notes if tx else "")
        ctk.CTkEntry(self, textvariable=self._notes_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._build_footer(r)

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save", width=110, command=self._on_save,
        ).pack(side="right")

    def _on_type_change(self):
        type_ = TransactionType(self._type_var.get())
        self._cat_names = [c.value for c in categories_for(type_)]
        self._cat_combo.configure(values=self._cat_names)
        if self._cat_var.get() not in self._cat_names:
            self._cat_var.set(self._cat_names[0])
            self._cat_combo.set(self._cat_names[0])

    def _on_save(self):
        try:
            amount = float(self._amount_var.get().replace(",", ""))
        except ValueError:
            self._error_var.set("Invalid amount.")
            return

        day = self._date_picker.get_date()
        if day is None:
            self._error_var.set("Invalid date. Use YYYY-MM-DD.")
            return

        fields = dict(
            amount=amount,
            title=self._title_var.get(),
            category=Category(self._cat_var.get()),
            date=combine_with_time(day, self._transaction.date if self._transaction else None),
            notes=self._notes_var.get(),
        )
        type_ = TransactionType(self._type_var.get())
        try:
            if self._transaction:
                self._tx_svc.revise(self._transaction, type=type_, **fields)
            else:
                self._tx_svc.create(type_=type_, **fields)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
