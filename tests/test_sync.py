"""Tests for the collection synchronizer against an in-memory client."""

from datetime import date
from decimal import Decimal

from common.form import FormController
from common.state import Draft, ExpenseState, Mode, StatusMessage
from common.sync import (
    CREATE_FAILED,
    CREATED,
    DELETE_FAILED,
    DELETED,
    FETCH_FAILED,
    NO_SELECTION,
    UPDATE_FAILED,
    UPDATED,
    CollectionSynchronizer,
)

from .conftest import FakeExpenseClient


def _fill(form: FormController, **values: str) -> None:
    for name, value in values.items():
        form.update_field(name, value)


class TestFetchAll:
    def test_replaces_list_and_clears_message(self, sync, client):
        sync.state.message = StatusMessage.error("Error deleting expense.")
        assert sync.fetch_all() is True
        assert [record["id"] for record in sync.state.records] == [1, 2]
        assert sync.state.message is None

    def test_failure_keeps_previous_list(self, sync, client):
        sync.fetch_all()
        before = list(sync.state.records)
        client.failing.add("list_expenses")

        assert sync.fetch_all() is False
        assert sync.state.records == before
        assert sync.state.message.text == FETCH_FAILED
        assert sync.state.message.is_error


class TestCreate:
    def test_builds_numeric_payload_with_today_default(self, client, form):
        sync = CollectionSynchronizer(client, form, today=lambda: date(2026, 10, 19))
        _fill(form, title="Lunch", amount="12.5", category="Food", date="", note="")

        assert sync.create() is True

        _, payload = client.calls[0]
        assert payload == {
            "title": "Lunch",
            "amount": 12.5,
            "category": "Food",
            "date": "2026-10-19",
            "note": "",
        }
        assert isinstance(payload["amount"], float)
        assert client.call_names() == ["create", "list"]
        assert form.draft == Draft()
        assert form.state.mode is Mode.CREATING
        assert form.state.message.text == CREATED
        assert not form.state.message.is_error
        assert any(record["title"] == "Lunch" for record in form.state.records)

    def test_keeps_explicit_date(self, sync, client, form):
        _fill(form, title="Taxi", amount="30", date="2026-01-05")
        sync.create()
        assert client.calls[0][1]["date"] == "2026-01-05"

    def test_accepts_explicit_draft(self, sync, client):
        assert sync.create(Draft(title="Book", amount="15")) is True
        assert client.calls[0][1]["title"] == "Book"

    def test_invalid_draft_sends_nothing(self, sync, client, form):
        _fill(form, title="  ", amount="10")
        assert sync.create() is False
        assert client.calls == []
        assert form.draft.amount == "10"

    def test_server_failure_leaves_draft(self, sync, client, form):
        client.failing.add("create_expense")
        _fill(form, title="Lunch", amount="12.5")

        assert sync.create() is False
        assert client.call_names() == ["create"]
        assert form.draft.title == "Lunch"
        assert form.state.message.text == CREATE_FAILED
        assert form.state.message.is_error

    def test_refresh_failure_reports_fetch_error(self, sync, client, form):
        client.failing.add("list_expenses")
        _fill(form, title="Lunch", amount="12.5")

        assert sync.create() is False
        assert form.draft == Draft()
        assert form.state.message.text == FETCH_FAILED


class TestUpdate:
    def test_sends_full_draft_keyed_by_id(self, sync, client, form):
        sync.fetch_all()
        form.load_for_edit(sync.state.records[1])
        form.update_field("amount", "2.75")

        assert sync.update() is True

        name, expense_id, payload = client.calls[1]
        assert (name, expense_id) == ("update", "2")
        assert payload == {
            "title": "Bus",
            "amount": 2.75,
            "category": "Transport",
            "date": "2026-10-02",
            "note": "to work",
        }
        assert client.call_names()[-1] == "list"
        assert form.state.mode is Mode.CREATING
        assert form.draft == Draft()
        assert form.state.message.text == UPDATED
        assert sync.state.records[1]["amount"] == 2.75

    def test_empty_date_is_sent_as_null(self, sync, client, form):
        form.load_for_edit({"id": 1, "title": "Coffee", "amount": 3.5})
        sync.update()
        assert client.calls[0][2]["date"] is None

    def test_empty_id_never_issues_put(self, sync, client, form):
        _fill(form, title="Lunch", amount="12")

        assert sync.update() is False
        assert sync.update("") is False
        assert sync.update("   ") is False
        assert "update" not in client.call_names()
        assert form.state.message.text == NO_SELECTION
        assert form.state.message.is_error

    def test_invalid_draft_never_issues_put(self, sync, client, form):
        form.load_for_edit({"id": 1, "title": "Coffee", "amount": 3.5})
        form.update_field("amount", "abc")

        assert sync.update() is False
        assert client.calls == []
        assert form.state.mode is Mode.EDITING

    def test_server_failure_keeps_editing(self, sync, client, form):
        client.failing.add("update_expense")
        form.load_for_edit({"id": 1, "title": "Coffee", "amount": 3.5})

        assert sync.update() is False
        assert form.state.mode is Mode.EDITING
        assert form.draft.id == "1"
        assert form.state.message.text == UPDATE_FAILED


class TestRemove:
    def test_deletes_and_refreshes(self, sync, client):
        sync.fetch_all()
        assert sync.remove(1) is True
        assert client.calls[1] == ("delete", "1")
        assert [record["id"] for record in sync.state.records] == [2]
        assert sync.state.message.text == DELETED

    def test_failure_leaves_list_untouched(self, sync, client):
        sync.fetch_all()
        before = list(sync.state.records)
        client.failing.add("delete_expense")

        assert sync.remove(2) is False
        assert sync.state.records == before
        assert sync.state.message.is_error
        assert "Error" in sync.state.message.text
        assert sync.state.message.text == DELETE_FAILED
        assert client.call_names() == ["list", "delete"]

    def test_does_not_touch_draft(self, sync, form):
        form.load_for_edit({"id": 2, "title": "Bus", "amount": 2})
        sync.remove(1)
        assert form.state.mode is Mode.EDITING
        assert form.draft.id == "2"


class TestTotal:
    def test_non_numeric_amounts_count_as_zero(self):
        state = ExpenseState(records=[{"amount": 10}, {"amount": "5"}, {"amount": None}])
        sync = CollectionSynchronizer(FakeExpenseClient(), FormController(state))
        assert sync.total() == 15

    def test_ignores_garbage_and_missing_keys(self):
        state = ExpenseState(records=[{"amount": "abc"}, {}, {"amount": "NaN"}, {"amount": 1.25}])
        sync = CollectionSynchronizer(FakeExpenseClient(), FormController(state))
        assert sync.total() == Decimal("1.25")

    def test_recomputed_from_current_list(self, sync):
        assert sync.total() == 0
        sync.fetch_all()
        assert sync.total() == Decimal("5.5")
