"""HTTP client for the remote ``/api/expenses`` resource."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional

import requests

from .exceptions import ApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:2004"
BASE_URL_ENV = "EXPENSE_TRACKER_API_URL"
EXPENSES_PATH = "/api/expenses"


def resolve_base_url(explicit: Optional[str] = None) -> str:
    """Pick the API base URL: explicit value, then environment, then the local default."""
    candidate = explicit or os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL
    return candidate.strip().rstrip("/")


class ExpenseApiClient:
    """Thin wrapper over ``requests`` that turns every failure into :class:`ApiError`."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = resolve_base_url(base_url)
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{EXPENSES_PATH}"

    def list_expenses(self) -> List[Dict[str, Any]]:
        response = self._request("GET", self.endpoint)
        data = self._json(response)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(f"Expected a JSON array from {self.endpoint}")
        return data

    def create_expense(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        response = self._request("POST", self.endpoint, json=dict(payload))
        return self._json(response) or {}

    def update_expense(self, expense_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        response = self._request("PUT", f"{self.endpoint}/{expense_id}", json=dict(payload))
        return self._json(response) or {}

    def delete_expense(self, expense_id: str) -> None:
        self._request("DELETE", f"{self.endpoint}/{expense_id}")

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Malformed JSON from {response.url}") from exc
