"""Tests for the Flask REST API stub."""

from pathlib import Path

import pytest

from api.app import create_app


@pytest.fixture
def http(tmp_path: Path):
    app = create_app(tmp_path / "data")
    app.config.update(TESTING=True)
    return app.test_client()


def _create(http, **overrides):
    payload = {"title": "Lunch", "amount": 12.5, "category": "Food", "date": "2026-10-19", "note": ""}
    payload.update(overrides)
    return http.post("/api/expenses", json=payload)


def test_home(http):
    response = http.get("/")
    assert response.status_code == 200
    assert b"Expense Tracker API" in response.data


def test_list_starts_empty(http):
    response = http.get("/api/expenses")
    assert response.status_code == 200
    assert response.get_json() == []


def test_create_returns_created_record(http):
    response = _create(http, id=77)
    assert response.status_code == 201
    body = response.get_json()
    assert body["id"] == 1
    assert body["amount"] == 12.5
    assert body["category"] == "Food"
    assert body["date"] == "2026-10-19"
    assert body["note"] is None
    assert response.headers["Location"].endswith("/api/expenses/1")

    listed = http.get("/api/expenses").get_json()
    assert [record["title"] for record in listed] == ["Lunch"]


def test_get_single(http):
    _create(http)
    assert http.get("/api/expenses/1").get_json()["title"] == "Lunch"
    assert http.get("/api/expenses/2").status_code == 404


def test_update(http):
    _create(http)
    response = http.put(
        "/api/expenses/1",
        json={"title": "Dinner", "amount": 30, "category": "", "date": None, "note": "late"},
    )
    assert response.status_code == 200
    body = response.get_json()
    assert (body["title"], body["amount"], body["category"], body["date"], body["note"]) == (
        "Dinner",
        30.0,
        None,
        None,
        "late",
    )


def test_update_missing_is_404(http):
    response = http.put("/api/expenses/9", json={"title": "Ghost", "amount": 1})
    assert response.status_code == 404
    assert response.get_json()["error"] == "Record not found"


def test_delete(http):
    _create(http)
    assert http.delete("/api/expenses/1").status_code == 204
    assert http.get("/api/expenses").get_json() == []
    assert http.delete("/api/expenses/1").status_code == 404


def test_validation_errors_are_400(http):
    response = _create(http, title="  ")
    assert response.status_code == 400
    assert response.get_json()["error"] == "Validation error"


def test_non_json_body_is_400(http):
    response = http.post("/api/expenses", data="title=Lunch")
    assert response.status_code == 400
