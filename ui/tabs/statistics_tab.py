import customtkinter as ctk
import tkinter as tk
import csv
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from utils.constants import TREND_MONTHS, TYPE_COLORS
from utils.currency import format_currency
from utils.date_helpers import format_month, today


class StatisticsTab(ctk.CTkFrame):
    def __init__(self, master, report_service: ReportService, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_summary()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        self._export_month_var = ctk.BooleanVar(value=False)
        ctk.CTkButton(bar, text="Export CSV", command=self._export_csv).pack(side="right", padx=8, pady=8)
        ctk.CTkCheckBox(
            bar, text="This month only", variable=self._export_month_var,
        ).pack(side="right", padx=8)

    def _build_summary(self):
        self._summary_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._summary_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=10)
        self._summary_frame.grid_columnconfigure((0, 1), weight=1)

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=3)
        charts.grid_columnconfigure(1, weight=2)
        charts.grid_rowconfigure(0, weight=1)

        bar_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        bar_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            bar_outer, text=f"Last {TREND_MONTHS} Months",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._bar_fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._bar_ax = self._bar_fig.add_subplot(111)
        self._bar_mpl = FigureCanvasTkAgg(self._bar_fig, master=bar_outer)
        self._bar_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        pie_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        pie_outer.grid(row=0, column=1, sticky="nsew")
        ctk.CTkLabel(
            pie_outer, text="Expenses by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=pie_outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 4))
        self._breakdown_frame = ctk.CTkScrollableFrame(pie_outer, fg_color="transparent", height=150)
        self._breakdown_frame.pack(fill="both", padx=8, pady=(0, 8))

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _load(self):
        for w in self._summary_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary()
        for i, (label, value) in enumerate([
            ("Total Balance", summary["balance"]),
            ("This Month Net", summary["net"]),
        ]):
            card = ctk.CTkFrame(
                self._summary_frame, fg_color=("gray90", "gray20"), corner_radius=10
            )
            card.grid(row=0, column=i, padx=6, sticky="ew")
            ctk.CTkLabel(card, text=label, text_color="gray60").pack(pady=(10, 0), padx=16)
            ctk.CTkLabel(
                card, text=format_currency(value),
                font=ctk.CTkFont(size=18, weight="bold"),
                text_color=TYPE_COLORS["Income"] if value >= 0 else TYPE_COLORS["Expense"],
            ).pack(pady=(4, 10), padx=16)

        self.after(50, self._draw_bar_chart)

        breakdown = self._report_svc.get_category_breakdown()
        self.after(50, lambda b=breakdown: self._draw_pie_chart(b))

        for w in self._breakdown_frame.winfo_children():
            w.destroy()
        if not breakdown:
            ctk.CTkLabel(
                self._breakdown_frame, text="No expenses yet.", text_color="gray60",
            ).pack(pady=10)
        for item in breakdown:
            f = ctk.CTkFrame(self._breakdown_frame, fg_color="transparent")
            f.pack(fill="x", pady=2)
            top_row = ctk.CTkFrame(f, fg_color="transparent")
            top_row.pack(fill="x")
            tk.Label(top_row, bg=item["color_hex"], width=2).pack(side="left", padx=(0, 4))
            ctk.CTkLabel(
                top_row, text=str(item["category"]), anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")
            ctk.CTkLabel(
                top_row,
                text=f"{format_currency(item['total'])}  ({item['percentage']:.1f}%)",
                anchor="e", text_color="gray60", font=ctk.CTkFont(size=11),
            ).pack(side="right")
            bar = ctk.CTkProgressBar(f, progress_color=item["color_hex"], height=6)
            bar.pack(fill="x", pady=1)
            bar.set(item["percentage"] / 100)

    def _draw_bar_chart(self):
        ax = self._bar_ax
        ax.clear()
        self._style_ax(ax, self._bar_fig)

        data = self._report_svc.get_monthly_chart_data(months=TREND_MONTHS)
        if not any(b.income or b.expense for b in data):
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._bar_mpl.draw_idle()
            return

        labels = [b.month for b in data]
        x = list(range(len(labels)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], [b.income for b in data], w, color=TYPE_COLORS["Income"])
        ax.bar([i + w / 2 for i in x], [b.expense for b in data], w, color=TYPE_COLORS["Expense"])
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._bar_mpl.draw_idle()

    def _draw_pie_chart(self, breakdown):
        ax = self._pie_ax
        ax.clear()
        self._style_ax(ax, self._pie_fig)

        if not breakdown:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [d["total"] for d in breakdown],
            colors=[d["color_hex"] for d in breakdown],
            startangle=90,
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

    def _export_csv(self):
        from tkinter import filedialog
        month = today() if self._export_month_var.get() else None
        rows = self._report_svc.export_csv(month)

        suffix = format_month(month) if month else "all"
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=f"transactions_{suffix}.csv",
        )
        if not path:
            return
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(rows)
