"""Keeps the in-memory expense collection consistent with the server.

Every mutation is one HTTP request followed, on success, by a full refresh of
the collection. The server is the only source of truth: nothing here edits
``state.records`` except :meth:`CollectionSynchronizer.fetch_all`.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .client import ExpenseApiClient
from .exceptions import ApiError
from .form import FormController
from .state import Draft, StatusMessage
from .validators import coerce_amount, parse_amount

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch expenses."
CREATED = "Expense created."
CREATE_FAILED = "Error creating expense."
UPDATED = "Expense updated."
UPDATE_FAILED = "Error updating expense."
NO_SELECTION = "No expense selected to update."
DELETED = "Expense deleted."
DELETE_FAILED = "Error deleting expense."


class CollectionSynchronizer:
    """Owns the record list and reconciles it with the REST API."""

    def __init__(
        self,
        client: ExpenseApiClient,
        form: FormController,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client
        self.form = form
        self.state = form.state
        self._today = today

    def fetch_all(self) -> bool:
        try:
            records = self.client.list_expenses()
        except ApiError as exc:
            logger.error("fetch_all error: %s", exc)
            self.state.message = StatusMessage.error(FETCH_FAILED)
            return False
        self.state.records = list(records)
        self.state.message = None
        return True

    def create(self, draft: Optional[Draft] = None) -> bool:
        draft = draft if draft is not None else self.state.draft
        if not self.form.validate(draft):
            return False
        payload = self._payload(draft)
        if not payload["date"]:
            payload["date"] = self._today().isoformat()
        try:
            self.client.create_expense(payload)
        except ApiError as exc:
            logger.error("create error: %s", exc)
            self.state.message = StatusMessage.error(CREATE_FAILED)
            return False
        return self._refresh_after_submit(CREATED)

    def update(self, expense_id: Optional[str] = None, draft: Optional[Draft] = None) -> bool:
        draft = draft if draft is not None else self.state.draft
        expense_id = expense_id if expense_id is not None else draft.id
        if not self.form.validate(draft):
            return False
        if not str(expense_id).strip():
            self.state.message = StatusMessage.error(NO_SELECTION)
            return False
        payload = self._payload(draft)
        payload["date"] = payload["date"] or None
        try:
            self.client.update_expense(str(expense_id).strip(), payload)
        except ApiError as exc:
            logger.error("update error: %s", exc)
            self.state.message = StatusMessage.error(UPDATE_FAILED)
            return False
        return self._refresh_after_submit(UPDATED)

    def remove(self, expense_id: Any) -> bool:
        try:
            self.client.delete_expense(str(expense_id))
        except ApiError as exc:
            logger.error("delete error: %s", exc)
            self.state.message = StatusMessage.error(DELETE_FAILED)
            return False
        if not self.fetch_all():
            return False
        self.state.message = StatusMessage.success(DELETED)
        return True

    def total(self) -> Decimal:
        return sum(
            (coerce_amount(record.get("amount")) for record in self.state.records),
            start=Decimal("0"),
        )

    def _refresh_after_submit(self, success_text: str) -> bool:
        self.form.reset()
        if not self.fetch_all():
            return False
        self.state.message = StatusMessage.success(success_text)
        return True

    @staticmethod
    def _payload(draft: Draft) -> Dict[str, Any]:
        return {
            "title": draft.title,
            "amount": parse_amount(draft.amount),
            "category": draft.category,
            "date": draft.date.strip(),
            "note": draft.note,
        }
