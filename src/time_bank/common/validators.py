from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_NOTE_LENGTH
from ..core.exceptions import ValidationError


def clean_note(value: Optional[str], field_name: str = "note") -> Optional[str]:
    note = (value or "").strip()
    if not note:
        return None
    if len(note) > MAX_NOTE_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_NOTE_LENGTH} characters", field=field_name)
    return note
