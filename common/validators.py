"""Validation helpers shared by the expense form and the API stub."""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from .exceptions import ValidationError
from .models import parse_date

TITLE_MAX_LENGTH = 120
CATEGORY_MAX_LENGTH = 50
NOTE_MAX_LENGTH = 1000


def parse_amount(raw: object, field: str = "amount") -> float:
    """Convert raw input to a finite float.

    Accepts numbers and numeric strings; surrounding whitespace is ignored.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    text = str(raw).strip()
    if not text:
        raise ValidationError(f"{field} is required")
    try:
        amount = float(text)
    except ValueError as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number")
    return amount


def coerce_amount(raw: object) -> Decimal:
    """Best-effort conversion used for aggregates; anything unusable counts as zero."""
    if raw is None or isinstance(raw, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_optional_str(value: object, field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return validate_required_str(value, field, max_length)


def validate_optional_amount(value: object, field: str = "amount") -> Optional[float]:
    if value is None:
        return None
    return parse_amount(value, field)


def validate_optional_date(value: object, field: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a YYYY-MM-DD or ISO 8601 string")
    if not value.strip():
        return None
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must be a YYYY-MM-DD or ISO 8601 string") from exc
