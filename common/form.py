"""Form controller owning the editable draft and its client-side validation."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .exceptions import ValidationError
from .models import display_date
from .state import DRAFT_FIELDS, Draft, ExpenseState, Mode, StatusMessage
from .validators import parse_amount

TITLE_REQUIRED = "Title required."
AMOUNT_INVALID = "Amount must be a number."


class FormController:
    """Holds the draft record and the creating/editing mode flag."""

    def __init__(self, state: ExpenseState) -> None:
        self.state = state

    @property
    def draft(self) -> Draft:
        return self.state.draft

    def update_field(self, name: str, value: Optional[object]) -> None:
        """Set one user-editable field on the draft without validating it."""
        if name not in DRAFT_FIELDS or name == "id":
            raise ValueError(f"Unknown or read-only draft field: {name}")
        setattr(self.state.draft, name, "" if value is None else str(value))

    def validate(self, draft: Optional[Draft] = None) -> bool:
        draft = draft if draft is not None else self.state.draft
        if not draft.title.strip():
            self.state.message = StatusMessage.error(TITLE_REQUIRED)
            return False
        try:
            parse_amount(draft.amount)
        except ValidationError:
            self.state.message = StatusMessage.error(AMOUNT_INVALID)
            return False
        return True

    def load_for_edit(self, record: Mapping[str, Any]) -> None:
        """Copy an existing record into the draft and switch to editing."""
        record_id = record.get("id")
        amount = record.get("amount")
        self.state.draft = Draft(
            id="" if record_id is None else str(record_id),
            title=record.get("title") or "",
            amount="" if amount is None else str(amount),
            category=record.get("category") or "",
            date=display_date(record.get("date")),
            note=record.get("note") or "",
        )
        self.state.mode = Mode.EDITING
        self.state.message = None

    def reset(self) -> None:
        self.state.draft = Draft()
        self.state.mode = Mode.CREATING
        self.state.message = None
