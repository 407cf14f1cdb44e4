"""Console client for the remote expense tracker API."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

from common.client import ExpenseApiClient
from common.form import FormController
from common.models import display_date
from common.state import ExpenseState
from common.sync import CollectionSynchronizer
from common.validators import coerce_amount

EDITABLE_FIELDS = ("title", "amount", "category", "date", "note")


def _parse_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _build_controllers(
    base_url: Optional[str], client_factory: Callable[[Optional[str]], ExpenseApiClient]
) -> Tuple[FormController, CollectionSynchronizer]:
    form = FormController(ExpenseState())
    return form, CollectionSynchronizer(client_factory(base_url), form)


def _format_expense(expense: Dict[str, Any]) -> str:
    return (
        f"[{expense.get('id')}] {display_date(expense.get('date')) or '-'} "
        f"{expense.get('title') or ''} {coerce_amount(expense.get('amount')):.2f}\n"
        f"  Category: {expense.get('category') or '-'}\n"
        f"  Note: {expense.get('note') or '-'}\n"
    )


def _report(form: FormController, ok: bool) -> int:
    message = form.state.message
    if message is not None:
        print(message.text, file=sys.stderr if message.is_error else sys.stdout)
    return 0 if ok else 1


def handle_list(sync: CollectionSynchronizer) -> bool:
    if not sync.fetch_all():
        return False
    records = sync.state.records
    if not records:
        print("No expenses found.")
        return True
    print(f"Found {len(records)} expenses (total {sync.total():.2f}):")
    for record in records:
        print(_format_expense(record))
    return True


def handle_add(args: argparse.Namespace, form: FormController, sync: CollectionSynchronizer) -> bool:
    for name in EDITABLE_FIELDS:
        value = getattr(args, name)
        if value is not None:
            form.update_field(name, value)
    return sync.create()


def handle_edit(args: argparse.Namespace, form: FormController, sync: CollectionSynchronizer) -> bool:
    if not sync.fetch_all():
        return False
    record = next(
        (item for item in sync.state.records if str(item.get("id")) == args.id), None
    )
    if record is None:
        print(f"Expense {args.id} not found.", file=sys.stderr)
        return False
    form.load_for_edit(record)
    for name in EDITABLE_FIELDS:
        value = getattr(args, name)
        if value is not None:
            form.update_field(name, value)
    return sync.update()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--base-url",
        help="API base URL (default: $EXPENSE_TRACKER_API_URL or http://localhost:2004)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List expenses and their total")

    add = subparsers.add_parser("add", help="Add a new expense")
    add.add_argument("title")
    add.add_argument("amount")
    add.add_argument("--category")
    add.add_argument("--date", type=_parse_date, help="YYYY-MM-DD (default: today)")
    add.add_argument("--note")

    edit = subparsers.add_parser("edit", help="Edit an existing expense")
    edit.add_argument("id")
    edit.add_argument("--title")
    edit.add_argument("--amount")
    edit.add_argument("--category")
    edit.add_argument("--date", type=_parse_date)
    edit.add_argument("--note")

    delete = subparsers.add_parser("delete", help="Delete an expense")
    delete.add_argument("id")

    return parser


def main(
    argv: Optional[List[str]] = None,
    client_factory: Callable[[Optional[str]], ExpenseApiClient] = ExpenseApiClient,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    form, sync = _build_controllers(args.base_url, client_factory)

    if args.command == "list":
        ok = handle_list(sync)
    elif args.command == "add":
        ok = handle_add(args, form, sync)
    elif args.command == "edit":
        ok = handle_edit(args, form, sync)
    elif args.command == "delete":
        ok = sync.remove(args.id)
    else:  # pragma: no cover - argparse should prevent this
        parser.error(f"Unknown command: {args.command}")
        return 2
    return _report(form, ok)


if __name__ == "__main__":
    raise SystemExit(main())
