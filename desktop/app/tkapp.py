"""Tkinter desktop front end for the remote expense tracker API."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from decimal import Decimal
from tkinter import messagebox, ttk
from typing import Dict, Iterable, Optional

from common.client import ExpenseApiClient
from common.form import FormController
from common.models import display_date
from common.state import ExpenseState
from common.sync import CollectionSynchronizer
from common.validators import coerce_amount


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
SUCCESS_BG = "#14532d"
ERROR_BG = "#7f1d1d"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"

FORM_FIELDS = (
    ("title", "Title"),
    ("amount", "Amount"),
    ("category", "Category (e.g., Food, Transport)"),
    ("date", "Date (YYYY-MM-DD)"),
    ("note", "Note (optional)"),
)


def format_amount_display(value: Decimal) -> str:
    return f"₹{value:,.2f}"


class ExpenseManagerApp(tk.Tk):
    """Single window: banner, form, total and the expense table."""

    def __init__(self, client: ExpenseApiClient) -> None:
        super().__init__()
        self.title("Expense Tracker")
        self.geometry("960x640")
        self.minsize(820, 560)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        self.ui_state = ExpenseState()
        self.form = FormController(self.ui_state)
        self.sync = CollectionSynchronizer(client, self.form)

        self.field_vars: Dict[str, tk.StringVar] = {
            name: tk.StringVar() for name, _label in FORM_FIELDS
        }
        self.heading_var = tk.StringVar()
        self.total_var = tk.StringVar()
        self.message_var = tk.StringVar()

        self._build_layout()
        self.sync.fetch_all()
        self.render()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("Card.TLabelframe", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Card.TLabelframe.Label", background=SECONDARY_BG, foreground=TEXT_PRIMARY)

        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("Total.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 14, "bold"))
        style.configure("Success.TLabel", background=SUCCESS_BG, foreground=TEXT_PRIMARY, padding=(12, 6))
        style.configure("Error.TLabel", background=ERROR_BG, foreground=TEXT_PRIMARY, padding=(12, 6))

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.configure(
            "Secondary.TButton",
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            padding=(14, 6),
        )
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])
        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=28,
        )
        style.configure("App.Treeview.Heading", background=SECONDARY_BG, foreground=TEXT_MUTED, relief="flat")
        style.map(
            "App.Treeview",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(3, weight=1)

        header = ttk.Frame(self, padding=(20, 16))
        header.grid(row=0, column=0, sticky="ew")
        header.columnconfigure(0, weight=1)
        ttk.Label(header, textvariable=self.heading_var, style="Header.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(header, textvariable=self.total_var, style="Total.TLabel").grid(row=0, column=1, sticky="e")

        self.banner = ttk.Label(self, textvariable=self.message_var, style="Success.TLabel")
        self.banner.grid(row=1, column=0, sticky="ew", padx=20)

        self._build_form()
        self._build_table()

    def _build_form(self) -> None:
        form = ttk.LabelFrame(self, text="Expense", style="Card.TLabelframe", padding=12)
        form.grid(row=2, column=0, sticky="ew", padx=20, pady=12)
        for column in range(len(FORM_FIELDS)):
            form.columnconfigure(column, weight=1)

        for column, (name, label) in enumerate(FORM_FIELDS):
            ttk.Label(form, text=label, style="FormLabel.TLabel").grid(
                column=column, row=0, sticky="w", padx=4, pady=4
            )
            entry = ttk.Entry(form, textvariable=self.field_vars[name], style="App.TEntry")
            entry.grid(column=column, row=1, sticky="ew", padx=4, pady=(0, 8))

        self.button_row = ttk.Frame(form, style="Panel.TFrame")
        self.button_row.grid(column=0, row=2, columnspan=len(FORM_FIELDS), sticky="e", padx=4, pady=4)
        self.add_button = ttk.Button(
            self.button_row, text="Add Expense", command=self.submit_create, style="Primary.TButton"
        )
        self.update_button = ttk.Button(
            self.button_row, text="Update", command=self.submit_update, style="Primary.TButton"
        )
        self.cancel_button = ttk.Button(
            self.button_row, text="Cancel", command=self.cancel_edit, style="Secondary.TButton"
        )

    def _build_table(self) -> None:
        table_frame = ttk.Frame(self, style="Panel.TFrame")
        table_frame.grid(row=3, column=0, sticky="nsew", padx=20, pady=(0, 16))
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)

        headings = {
            "id": ("ID", 60),
            "title": ("Title", 180),
            "amount": ("Amount", 110),
            "category": ("Category", 140),
            "date": ("Date", 110),
            "note": ("Note", 220),
        }
        self.tree = ttk.Treeview(
            table_frame,
            columns=tuple(headings),
            show="headings",
            height=12,
            style="App.Treeview",
        )
        for key, (label, width) in headings.items():
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="w")
        self.tree.bind("<Double-1>", lambda _event: self.edit_selected())

        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        self.empty_label = ttk.Label(table_frame, text="No expenses found.", style="FormLabel.TLabel")

        button_bar = ttk.Frame(table_frame, style="Panel.TFrame")
        button_bar.grid(row=2, column=0, columnspan=2, sticky="e", pady=8)
        ttk.Button(button_bar, text="Refresh", command=self.refresh, style="Secondary.TButton").grid(
            row=0, column=0, padx=4
        )
        ttk.Button(button_bar, text="Edit", command=self.edit_selected, style="Secondary.TButton").grid(
            row=0, column=1, padx=4
        )
        ttk.Button(button_bar, text="Delete", command=self.delete_selected, style="Secondary.TButton").grid(
            row=0, column=2, padx=4
        )

    # Actions --------------------------------------------------------------
    def _collect_draft(self) -> None:
        for name, var in self.field_vars.items():
            self.form.update_field(name, var.get())

    def submit_create(self) -> None:
        self._collect_draft()
        self.sync.create()
        self.render()

    def submit_update(self) -> None:
        self._collect_draft()
        self.sync.update()
        self.render()

    def cancel_edit(self) -> None:
        self.form.reset()
        self.render()

    def refresh(self) -> None:
        self.sync.fetch_all()
        self.render()

    def edit_selected(self) -> None:
        record = self._selected_record()
        if record is None:
            return
        self.form.load_for_edit(record)
        self.render()

    def delete_selected(self) -> None:
        record = self._selected_record()
        if record is None:
            return
        if not messagebox.askyesno("Delete Expense", f"Delete '{record.get('title')}'?", parent=self):
            return
        self.sync.remove(record.get("id"))
        self.render()

    def _selected_record(self) -> Optional[dict]:
        selection = self.tree.selection()
        if not selection:
            messagebox.showinfo("No selection", "Please select an expense first.", parent=self)
            return None
        index = self.tree.index(selection[0])
        return self.ui_state.records[index]

    # Rendering ------------------------------------------------------------
    def render(self) -> None:
        state = self.ui_state
        self.heading_var.set("Edit Expense" if state.editing else "Add Expense")
        self.total_var.set(f"Total: {format_amount_display(self.sync.total())}")

        draft = state.draft
        for name, var in self.field_vars.items():
            var.set(getattr(draft, name))

        if state.message is None:
            self.message_var.set("")
            self.banner.grid_remove()
        else:
            self.message_var.set(state.message.text)
            self.banner.configure(style="Error.TLabel" if state.message.is_error else "Success.TLabel")
            self.banner.grid()

        for button in (self.add_button, self.update_button, self.cancel_button):
            button.grid_forget()
        if state.editing:
            self.update_button.grid(row=0, column=0, padx=4)
            self.cancel_button.grid(row=0, column=1, padx=4)
        else:
            self.add_button.grid(row=0, column=0, padx=4)

        self.tree.delete(*self.tree.get_children())
        for record in state.records:
            self.tree.insert(
                "",
                "end",
                values=(
                    record.get("id"),
                    record.get("title") or "",
                    format_amount_display(coerce_amount(record.get("amount"))),
                    record.get("category") or "",
                    display_date(record.get("date")),
                    record.get("note") or "",
                ),
            )
        if state.records:
            self.empty_label.grid_remove()
        else:
            self.empty_label.grid(row=1, column=0, sticky="w", pady=8)


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the expense tracker")
    parser.add_argument(
        "--base-url",
        help="API base URL (default: $EXPENSE_TRACKER_API_URL or http://localhost:2004)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    app = ExpenseManagerApp(ExpenseApiClient(args.base_url))
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
