"""Shared fixtures: an in-memory stand-in for the REST client."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Set

import pytest

from common.exceptions import ApiError
from common.form import FormController
from common.state import ExpenseState
from common.sync import CollectionSynchronizer


class FakeExpenseClient:
    """Mimics ``ExpenseApiClient`` against a dict store; ``failing`` names methods that raise."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self.records: List[Dict[str, Any]] = [dict(record) for record in records or []]
        self.calls: List[tuple] = []
        self.failing: Set[str] = set()
        self._next_id = max([0, *(int(r["id"]) for r in self.records)]) + 1

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise ApiError(f"{name} failed: connection refused")

    def list_expenses(self) -> List[Dict[str, Any]]:
        self.calls.append(("list",))
        self._check("list_expenses")
        return [dict(record) for record in self.records]

    def create_expense(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create", dict(payload)))
        self._check("create_expense")
        record = {"id": self._next_id, **payload}
        self._next_id += 1
        self.records.append(record)
        return record

    def update_expense(self, expense_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", expense_id, dict(payload)))
        self._check("update_expense")
        for record in self.records:
            if str(record["id"]) == expense_id:
                record.update(payload)
                return record
        raise ApiError(f"PUT {expense_id} failed: 404")

    def delete_expense(self, expense_id: str) -> None:
        self.calls.append(("delete", expense_id))
        self._check("delete_expense")
        self.records = [r for r in self.records if str(r["id"]) != expense_id]

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def client() -> FakeExpenseClient:
    return FakeExpenseClient(
        [
            {"id": 1, "title": "Coffee", "amount": 3.5, "category": "Food", "date": "2026-10-01", "note": ""},
            {"id": 2, "title": "Bus", "amount": 2, "category": "Transport", "date": "2026-10-02T08:15:00", "note": "to work"},
        ]
    )


@pytest.fixture
def form() -> FormController:
    return FormController(ExpenseState())


@pytest.fixture
def sync(client: FakeExpenseClient, form: FormController) -> CollectionSynchronizer:
    return CollectionSynchronizer(client, form)
