from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayCategory, DayType, Occurrence


@dataclass(frozen=True)
class DayClassification:
    """Read-model of one classified calendar day (never persisted)."""

    work_date: date
    weekday: str
    day_type: DayType
    occurrence: Occurrence
    expected_minutes: int
    worked_minutes: int
    diff_minutes: int
    category: DayCategory
    impact_minutes: int
