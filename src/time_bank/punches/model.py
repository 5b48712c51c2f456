from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Occurrence


@dataclass(frozen=True)
class DailyPunchRecord:
    """Domain entity: one employee's punches for one calendar date."""

    employee_id: int
    work_date: date
    morning_in: Optional[str] = None
    morning_out: Optional[str] = None
    afternoon_in: Optional[str] = None
    afternoon_out: Optional[str] = None
    extra_in: Optional[str] = None
    extra_out: Optional[str] = None
    occurrence: Occurrence = Occurrence.NORMAL
    absence_reason_id: Optional[int] = None
    note: Optional[str] = None
    is_holiday: bool = False

    def pairs(self) -> tuple[tuple[str, Optional[str], Optional[str]], ...]:
        return (
            ("morning", self.morning_in, self.morning_out),
            ("afternoon", self.afternoon_in, self.afternoon_out),
            ("extra", self.extra_in, self.extra_out),
        )

    def is_blank(self) -> bool:
        """True when the record carries nothing worth storing."""
        has_times = any(start or end for _, start, end in self.pairs())
        return not (
            has_times
            or self.occurrence is not Occurrence.NORMAL
            or self.note
            or self.absence_reason_id is not None
            or self.is_holiday
        )
