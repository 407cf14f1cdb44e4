"""Persistence utilities for the expense tracker API stub."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from .exceptions import PersistenceError


class JSONStorage:
    """File-based JSON document store with crash-safe writes.

    Each resource is one file holding ``{"next_id": int, "records": [...]}`` so
    identifiers keep increasing across restarts and are never reused.
    """

    def __init__(self, base_path: Path) -> None:
        self._base_path = base_path
        self._base_path.mkdir(parents=True, exist_ok=True)

    def load(self, resource: str) -> Tuple[int, List[Dict[str, Any]]]:
        """Return ``(next_id, records)``; a missing file is an empty resource."""
        path = self._base_path / resource
        if not path.exists():
            return 1, []
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("records"), list):
            raise PersistenceError(f"Expected a records document in {path}")
        next_id = payload.get("next_id")
        if not isinstance(next_id, int) or next_id < 1:
            raise PersistenceError(f"Invalid next_id in {path}")
        return next_id, payload["records"]

    def save(self, resource: str, next_id: int, records: Iterable[Dict[str, Any]]) -> None:
        path = self._base_path / resource
        temp_path = path.with_suffix(path.suffix + ".tmp")
        document = {"next_id": next_id, "records": list(records)}
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
                handle.flush()
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {temp_path}") from exc
        temp_path.replace(path)

    @property
    def base_path(self) -> Path:
        return self._base_path
