from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Holiday:
    """A holiday that recurs on the same day/month every year."""

    holiday_id: int
    day: int
    month: int
    description: str
    is_active: bool = True


@dataclass(frozen=True)
class AbsenceReason:
    reason_id: int
    description: str
    is_active: bool = True
    display_order: int = 0
