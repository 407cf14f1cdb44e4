"""Flask REST API exposing the expense records under ``/api/expenses``."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from common.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from common.services import ExpenseService
from common.storage import JSONStorage

DEFAULT_PORT = 2004


def create_app(data_dir: Optional[Path] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}})
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/api/*": {"origins": origins}})
        else:
            CORS(app)

    storage = JSONStorage(Path(data_dir or "data"))
    expense_service = ExpenseService(storage)

    def _success(payload: Any, status: int = 200, headers: Optional[Dict[str, str]] = None):
        if status == 204:
            return ("", status)
        return jsonify(payload), status, headers or {}

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/")
    def home():
        return "Welcome to Expense Tracker API! Server is running."

    @app.get("/api/expenses")
    def list_expenses():
        app.logger.info("Received GET on /api/expenses")
        return _success([expense.to_dict() for expense in expense_service.list()])

    @app.post("/api/expenses")
    def create_expense():
        app.logger.info("Received POST on /api/expenses")
        expense = expense_service.add(_json_body())
        return _success(expense.to_dict(), 201, {"Location": f"/api/expenses/{expense.id}"})

    @app.get("/api/expenses/<int:expense_id>")
    def get_expense(expense_id: int):
        return _success(expense_service.get(expense_id).to_dict())

    @app.put("/api/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        app.logger.info("Received PUT on /api/expenses (id=%s)", expense_id)
        payload = _json_body()
        expense = expense_service.update(expense_id, payload)
        return _success(expense.to_dict())

    @app.delete("/api/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        app.logger.info("Received DELETE on /api/expenses (id=%s)", expense_id)
        expense_service.delete(expense_id)
        return _success({}, 204)

    return app


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Expense tracker REST API")
    parser.add_argument(
        "--data-dir",
        default="data",
        type=Path,
        help="Directory to store JSON data (default: ./data)",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    app = create_app(args.data_dir)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
