"""Explicit UI state shared by the expense form and the collection synchronizer."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

__all__ = ["Draft", "ExpenseState", "Mode", "StatusMessage", "DRAFT_FIELDS"]


class Mode(Enum):
    CREATING = "creating"
    EDITING = "editing"


@dataclass
class Draft:
    """The form's in-progress record, kept as the raw text the user typed."""

    id: str = ""
    title: str = ""
    amount: str = ""
    category: str = ""
    date: str = ""
    note: str = ""

    def is_empty(self) -> bool:
        return self == Draft()


DRAFT_FIELDS = tuple(item.name for item in fields(Draft))


@dataclass(frozen=True)
class StatusMessage:
    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "StatusMessage":
        return cls(text, is_error=False)

    @classmethod
    def error(cls, text: str) -> "StatusMessage":
        return cls(text, is_error=True)


@dataclass
class ExpenseState:
    """Everything the single-page UI renders from.

    ``records`` holds the JSON objects exactly as last returned by the server;
    only a successful refresh may replace it.
    """

    records: List[Dict[str, Any]] = field(default_factory=list)
    draft: Draft = field(default_factory=Draft)
    mode: Mode = Mode.CREATING
    message: Optional[StatusMessage] = None

    @property
    def editing(self) -> bool:
        return self.mode is Mode.EDITING
