"""Server-side expense service backing the REST API stub."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Mapping

from .exceptions import PersistenceError, RecordNotFoundError
from .models import Expense
from .storage import JSONStorage
from .validators import (
    CATEGORY_MAX_LENGTH,
    NOTE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    validate_optional_amount,
    validate_optional_date,
    validate_optional_str,
    validate_required_str,
)


class ExpenseService:
    """Manages expense records and mediates persistence."""

    def __init__(self, storage: JSONStorage, resource: str = "expenses.json") -> None:
        self._storage = storage
        self._resource = resource
        self._expenses: Dict[int, Expense] = {}
        self._next_id = 1
        self.load()  # Hydrate in-memory cache from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(self, payload: Mapping[str, object]) -> Expense:
        """Create a new expense; any ``id`` in the payload is ignored."""
        fields = self._validate_payload(payload)
        expense = Expense(id=self._next_id, created_at=datetime.now(timezone.utc), **fields)
        self._expenses[expense.id] = expense
        self._next_id += 1
        self._persist()
        return expense

    def update(self, expense_id: int, payload: Mapping[str, object]) -> Expense:
        """Replace every editable field of an existing expense."""
        existing = self._get_or_raise(expense_id)
        fields = self._validate_payload(payload)
        updated = Expense(id=existing.id, created_at=existing.created_at, **fields)
        self._expenses[expense_id] = updated
        self._persist()
        return updated

    def delete(self, expense_id: int) -> None:
        self._get_or_raise(expense_id)
        del self._expenses[expense_id]
        self._persist()

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        return self._get_or_raise(expense_id)

    def exists(self, expense_id: int) -> bool:
        return expense_id in self._expenses

    def list(self) -> List[Expense]:
        return sorted(self._expenses.values(), key=lambda exp: exp.id)

    def load(self) -> None:
        """Load existing expenses from persistence."""
        next_id, raw_records = self._storage.load(self._resource)
        try:
            expenses = {
                int(payload["id"]): Expense.from_dict(payload) for payload in raw_records
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Malformed expense record in {self._resource}") from exc
        self._expenses = expenses
        self._next_id = max([next_id, *(exp_id + 1 for exp_id in expenses)])

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        try:
            self._storage.save(
                self._resource,
                self._next_id,
                [expense.to_dict() for expense in self.list()],
            )
        except PersistenceError:
            raise
        except Exception as exc:  # pragma: no cover - defensive guard
            raise PersistenceError("Unexpected error while saving expenses") from exc

    def _get_or_raise(self, expense_id: int) -> Expense:
        try:
            return self._expenses[expense_id]
        except KeyError as exc:
            raise RecordNotFoundError(f"Expense {expense_id} not found") from exc

    @staticmethod
    def _validate_payload(payload: Mapping[str, object]) -> Dict[str, object]:
        # Stub validation only: title is the sole required field.
        return {
            "title": validate_required_str(payload.get("title"), "title", TITLE_MAX_LENGTH),
            "amount": validate_optional_amount(payload.get("amount")),
            "category": validate_optional_str(payload.get("category"), "category", CATEGORY_MAX_LENGTH),
            "date": validate_optional_date(payload.get("date"), "date"),
            "note": validate_optional_str(payload.get("note"), "note", NOTE_MAX_LENGTH),
        }
