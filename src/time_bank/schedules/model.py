from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.datetime_utils import normalize_tolerance, parse_hhmm, span_minutes


@dataclass(frozen=True)
class WorkSchedule:
    """Expected daily work schedule shared by one or more employees.

    Times are ``HH:MM`` tokens. Expected minutes are derived once, at
    construction: morning block + afternoon block - break.
    """

    schedule_id: int
    name: str
    morning_in: Optional[str]
    morning_out: Optional[str]
    afternoon_in: Optional[str] = None
    afternoon_out: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    tolerance_minutes: int = 0
    expected_minutes: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "tolerance_minutes", normalize_tolerance(self.tolerance_minutes))
        object.__setattr__(self, "expected_minutes", self._compute_expected())

    def _compute_expected(self) -> int:
        morning = span_minutes(
            parse_hhmm(self.morning_in, field="morning_in"), parse_hhmm(self.morning_out, field="morning_out")
        )
        afternoon = span_minutes(
            parse_hhmm(self.afternoon_in, field="afternoon_in"), parse_hhmm(self.afternoon_out, field="afternoon_out")
        )
        pause = span_minutes(
            parse_hhmm(self.break_start, field="break_start"), parse_hhmm(self.break_end, field="break_end")
        )
        return max(morning + afternoon - pause, 0)
