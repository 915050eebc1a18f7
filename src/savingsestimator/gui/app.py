"""Tkinter GUI application for savings-estimator."""
from __future__ import annotations

import tkinter as tk
from tkinter import filedialog, messagebox, scrolledtext, ttk
from typing import Dict, Optional

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk
from matplotlib.figure import Figure

from ..accounts import AccountCategory, descriptor, is_registered, uses_annual_contribution
from ..charting import plot_trajectory
from ..computation import ProjectionOutputs, compute_outputs, resolve_use_numpy
from ..config import Settings, load_settings
from ..finance import Frequency
from ..log import get_logger, setup_logging
from ..parsing import RawFields, account_fields, parse_category
from ..reporting import (
    TRAJECTORY_HEADER,
    export_csv,
    format_abbreviated,
    format_full,
    render_table,
    trajectory_rows,
)
from ..themes import THEMES, Theme, get_theme

logger = get_logger(__name__)

ACCOUNT_LABELS = ["(none)"] + [c.value for c in AccountCategory if c.value]

HELP_TEXT = """\
HOW THE PROJECTION WORKS
------------------------
• Your initial deposit compounds at the annual return rate, split evenly over
  the chosen compounding periods (1, 2, 4, 12 or 365 per year).
• Monthly contributions are converted to the amount added each period and grow
  as an annuity alongside the deposit.
• "Total contributed" counts the monthly contribution twelve times a year.
• At a 0% return the balance is simply the sum of everything you put in.

COST OF WAITING
---------------
• "Wait 5 Years" and "Wait 10 Years" rerun the same plan with a shorter horizon.
  The difference from starting now is what the delay costs you.

ACCOUNT LIMITS
--------------
• TFSA: $7,000 per year.
• RRSP: 18% of last year's income, up to $31,560.
• FHSA: $8,000 per year and $40,000 lifetime.
• RESP: $50,000 lifetime; the grant adds 20% of contributions, up to $500 a year.

Figures are estimates only and are not tax advice.
"""


class App(tk.Tk):
    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self._settings = settings or Settings()
        self.title("Savings Estimator")
        self.geometry("1100x900")
        self._theme_var = tk.StringVar(value=self._settings.theme)
        self._engine_var = tk.StringVar(value=self._settings.engine)
        self._outputs = ProjectionOutputs()

        self._vars: Dict[str, tk.StringVar] = {
            name: tk.StringVar()
            for name in (
                "principal",
                "monthly_contribution",
                "years",
                "rate",
                "annual_contribution",
                "annual_income",
                "eligible_years",
            )
        }
        self._vars["frequency"] = tk.StringVar(value=self._settings.default_frequency.value)
        self._vars["account"] = tk.StringVar(value=ACCOUNT_LABELS[0])

        self._build_menu()
        self._build_inputs()
        self._build_chart()
        self._build_text()

        for var in self._vars.values():
            var.trace_add("write", self._on_input_changed)
        self._apply_theme(self._get_theme())

    # ---------- Menu / Help ----------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self)
        settings = tk.Menu(menubar, tearoff=0)
        theme_menu = tk.Menu(settings, tearoff=0)
        for name in sorted(THEMES):
            theme_menu.add_radiobutton(
                label=name.title(),
                value=name,
                variable=self._theme_var,
                command=lambda: self._apply_theme(self._get_theme()),
            )
        settings.add_cascade(label="Theme", menu=theme_menu)
        engine_menu = tk.Menu(settings, tearoff=0)
        for value, label in (("auto", "Auto"), ("numpy", "NumPy"), ("python", "Pure Python")):
            engine_menu.add_radiobutton(
                label=label, value=value, variable=self._engine_var, command=self._recompute
            )
        settings.add_cascade(label="Engine", menu=engine_menu)
        menubar.add_cascade(label="Settings", menu=settings)
        helpmenu = tk.Menu(menubar, tearoff=0)
        helpmenu.add_command(label="How it works", command=self._open_help)
        menubar.add_cascade(label="Help", menu=helpmenu)
        self.config(menu=menubar)

    def _open_help(self) -> None:
        win = tk.Toplevel(self)
        win.title("Savings Estimator: How it works")
        win.geometry("720x520")
        txt = scrolledtext.ScrolledText(win, wrap="word")
        txt.pack(fill="both", expand=True)
        txt.insert("end", HELP_TEXT)
        txt.config(state="disabled")

    def _build_inputs(self) -> None:
        container = ttk.Frame(self)
        container.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)

        standard = ttk.LabelFrame(container, text="Your Plan")
        standard.pack(side=tk.TOP, fill=tk.X, pady=(0, 6))
        for col in (1, 3, 5):
            standard.grid_columnconfigure(col, weight=1)

        fields = [
            ("Initial investment ($):", "principal", 0, 0),
            ("Monthly contribution ($):", "monthly_contribution", 0, 2),
            ("Length of time (years):", "years", 0, 4),
            ("Annual return (%):", "rate", 1, 0),
        ]
        entries = {}
        for label, key, row, col in fields:
            ttk.Label(standard, text=label).grid(row=row, column=col, sticky="w")
            entries[key] = ttk.Entry(standard, width=14, textvariable=self._vars[key])
            entries[key].grid(row=row, column=col + 1, padx=6, pady=4, sticky="w")
        self.ent_monthly = entries["monthly_contribution"]

        ttk.Label(standard, text="Compound frequency:").grid(row=1, column=2, sticky="w")
        ttk.Combobox(
            standard,
            textvariable=self._vars["frequency"],
            values=[f.value for f in Frequency],
            state="readonly",
            width=14,
        ).grid(row=1, column=3, padx=6, pady=4, sticky="w")

        ttk.Label(standard, text="Account type:").grid(row=1, column=4, sticky="w")
        ttk.Combobox(
            standard,
            textvariable=self._vars["account"],
            values=ACCOUNT_LABELS,
            state="readonly",
            width=14,
        ).grid(row=1, column=5, padx=6, pady=4, sticky="w")

        self.account_frame = ttk.LabelFrame(container, text="Account Details")
        self.lbl_account_info = ttk.Label(self.account_frame, text="", wraplength=900)
        self.lbl_account_info.grid(row=0, column=0, columnspan=6, sticky="w", pady=(2, 4))
        self._account_widgets = {}
        for col, (label, key) in enumerate(
            (
                ("Annual contribution ($):", "annual_contribution"),
                ("Previous-year income ($):", "annual_income"),
                ("Eligible years:", "eligible_years"),
            )
        ):
            lbl = ttk.Label(self.account_frame, text=label)
            ent = ttk.Entry(self.account_frame, width=14, textvariable=self._vars[key])
            lbl.grid(row=1, column=col * 2, sticky="w")
            ent.grid(row=1, column=col * 2 + 1, padx=6, pady=4, sticky="w")
            self._account_widgets[key] = (lbl, ent)
        self.lbl_advisory = tk.Label(
            self.account_frame, text="", wraplength=900, justify="left", anchor="w"
        )
        self.lbl_advisory.grid(row=2, column=0, columnspan=6, sticky="we", pady=(2, 4))

        buttons = ttk.Frame(container)
        buttons.pack(side=tk.BOTTOM, fill=tk.X)
        ttk.Button(buttons, text="Export CSV", command=self._export_csv).pack(
            side=tk.LEFT, padx=4, pady=(4, 0)
        )

    def _build_chart(self) -> None:
        frm = ttk.LabelFrame(self, text="Growth Over Time")
        frm.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=6)
        self.fig = Figure(figsize=(10, 4.2))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=frm)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)
        toolbar = NavigationToolbar2Tk(self.canvas, frm)
        toolbar.update()

    def _build_text(self) -> None:
        frm = ttk.LabelFrame(self, text="Summary")
        frm.pack(side=tk.TOP, fill=tk.BOTH, padx=8, pady=6)
        self.txt = scrolledtext.ScrolledText(frm, wrap="word", height=12)
        self.txt.pack(fill=tk.BOTH, expand=True)

    # ---------- parsing helpers ----------
    def _get_theme(self) -> Theme:
        return get_theme(self._theme_var.get() or "dark")

    def _get_category(self) -> AccountCategory:
        label = self._vars["account"].get()
        return parse_category("" if label == ACCOUNT_LABELS[0] else label)

    def _get_raw_fields(self) -> RawFields:
        category = self._get_category()
        return RawFields(
            principal=self._vars["principal"].get(),
            monthly_contribution=self._vars["monthly_contribution"].get(),
            years=self._vars["years"].get(),
            rate=self._vars["rate"].get(),
            frequency=self._vars["frequency"].get(),
            account=category.value,
            annual_contribution=self._vars["annual_contribution"].get(),
            annual_income=self._vars["annual_income"].get(),
            eligible_years=self._vars["eligible_years"].get(),
        )

    # ---------- recompute ----------
    def _on_input_changed(self, *_: object) -> None:
        self._recompute()

    def _recompute(self) -> None:
        self._outputs = compute_outputs(
            self._get_raw_fields(), use_numpy=resolve_use_numpy(self._engine_var.get())
        )
        self._render_account_details()
        self._render_chart()
        self._render_summary()

    def _render_account_details(self) -> None:
        category = self._get_category()
        fields = account_fields(self._get_raw_fields())
        annual_in_use = uses_annual_contribution(category, fields)
        self.ent_monthly.state(["disabled"] if annual_in_use else ["!disabled"])
        if category is AccountCategory.UNSELECTED:
            self.account_frame.pack_forget()
            return
        self.account_frame.pack(side=tk.TOP, fill=tk.X, pady=(0, 6))
        info = descriptor(category)
        self.lbl_account_info.configure(
            text=f"{info.description}. Limit: {info.limit_text}. {info.tax_advantage}."
        )
        visible = {
            "annual_contribution": is_registered(category),
            "annual_income": category is AccountCategory.RRSP,
            "eligible_years": category is AccountCategory.TFSA,
        }
        for key, (lbl, ent) in self._account_widgets.items():
            if visible[key]:
                lbl.grid()
                ent.grid()
            else:
                lbl.grid_remove()
                ent.grid_remove()

        theme = self._get_theme()
        advisory = self._outputs.advisory
        if advisory is None:
            self.lbl_advisory.configure(text="", bg=theme.surface)
            return
        color = theme.warning if advisory.is_warning else theme.confirmation
        self.lbl_advisory.configure(text=advisory.message, fg=color, bg=theme.surface)

    def _render_chart(self) -> None:
        theme = self._get_theme()
        self.fig.set_facecolor(theme.background)
        plot_trajectory(self.ax, self._outputs.trajectory or [], theme)
        self.canvas.draw_idle()

    def _render_summary(self) -> None:
        self.txt.configure(state="normal")
        self.txt.delete("1.0", "end")
        result = self._outputs.result
        if result is not None:
            category = self._get_category()
            heading = (
                f"YOUR {category.value} PROJECTION"
                if category not in (AccountCategory.UNSELECTED, AccountCategory.GENERAL)
                else "YOUR PROJECTION"
            )
            self.txt.insert(
                "end",
                f"{heading}\n"
                f"  Total balance:     {format_abbreviated(result.final_balance)}"
                f"  ({format_full(result.final_balance)})\n"
                f"  Total contributed: {format_full(result.total_contributed)}\n"
                f"  Total interest:    {format_full(result.total_interest)}\n\n",
            )
            scenarios = self._outputs.scenarios or []
            rows = [
                [s.label, str(s.years), s.final_balance, s.opportunity_cost]
                for s in scenarios
            ]
            self.txt.insert(
                "end",
                render_table(
                    ["Scenario", "Years", "Balance", "Cost of waiting"],
                    rows,
                    "THE COST OF WAITING",
                ),
            )
            if len(scenarios) > 1:
                self.txt.insert(
                    "end",
                    f"\nStarting today vs waiting {scenarios[-1].label.split()[1]} years "
                    f"could cost you {format_full(scenarios[-1].opportunity_cost)}.\n",
                )
        self.txt.configure(state="disabled")

    # ---------- theming ----------
    def _apply_theme(self, theme: Theme) -> None:
        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure(".", background=theme.background, foreground=theme.foreground)
        style.configure("TLabelframe", background=theme.background)
        style.configure("TLabelframe.Label", background=theme.background, foreground=theme.muted)
        style.configure("TEntry", fieldbackground=theme.surface, foreground=theme.foreground)
        style.configure("TCombobox", fieldbackground=theme.surface, foreground=theme.foreground)
        style.configure("TButton", background=theme.surface, foreground=theme.foreground)
        self.configure(background=theme.background)
        self.txt.configure(
            background=theme.surface,
            foreground=theme.foreground,
            insertbackground=theme.foreground,
        )
        logger.info("Theme set to %s", theme.name)
        self._recompute()

    # ---------- export ----------
    def _export_csv(self) -> None:
        trajectory = self._outputs.trajectory
        if not trajectory:
            messagebox.showinfo("Export", "Enter a valid plan before exporting.")
            return
        path = filedialog.asksaveasfilename(
            title="Export CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
        )
        if not path:
            return
        try:
            export_csv(path, TRAJECTORY_HEADER, trajectory_rows(trajectory))
        except OSError as exc:
            messagebox.showerror("Export", str(exc))
            return
        messagebox.showinfo("Export", f"CSV exported to {path}")


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    App(settings).mainloop()


__all__ = ["run", "App"]
