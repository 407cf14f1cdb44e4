"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

__all__ = ["Expense", "display_date", "isoformat_utc", "parse_date", "parse_datetime"]


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with trailing Z for UTC-aware datetimes."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat(timespec="seconds")
    # datetime.isoformat renders +00:00 for UTC; replace with the shorter Z form.
    return iso.replace("+00:00", "Z")


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into UTC-aware datetime."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        # Treat naive datetimes as UTC to avoid accidental timezone drift.
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def display_date(value: Optional[object]) -> str:
    """Return the ``YYYY-MM-DD`` portion of a date or ISO datetime value."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    return str(value).split("T")[0].strip()


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or a full ISO datetime, keeping only the calendar date."""
    return date.fromisoformat(display_date(value))


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: Optional[float] = None
    category: Optional[str] = None
    date: Optional[date] = None
    note: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "title": self.title,
            "amount": self.amount,
            "category": self.category,
            "date": self.date.isoformat() if self.date else None,
            "note": self.note,
            "created_at": isoformat_utc(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from JSON-native data."""
        amount = data.get("amount")
        raw_date = data.get("date")
        raw_created = data.get("created_at")
        return cls(
            id=int(data["id"]),
            title=data["title"],
            amount=float(amount) if amount is not None else None,
            category=data.get("category"),
            date=parse_date(raw_date) if raw_date else None,
            note=data.get("note"),
            created_at=parse_datetime(raw_created) if raw_created else datetime.now(timezone.utc),
        )
