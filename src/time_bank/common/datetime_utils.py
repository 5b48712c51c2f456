from __future__ import annotations

import calendar
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterator, Optional

from ..core.constants import MINUTES_PER_HOUR
from ..core.enums import DayType
from ..core.exceptions import InvalidPeriodTokenError, InvalidTimeFormatError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")

_WEEKDAY_LABELS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_hhmm(value: Optional[str], *, field: str = "time") -> Optional[int]:
    """Convert an ``HH:MM`` token into minutes since midnight.

    Blank values mean "not punched" and return None.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    m = _HHMM.match(text)
    if not m:
        raise InvalidTimeFormatError(f"{field}: '{text}' is not a valid HH:MM time", field=field)
    return int(m.group(1)) * MINUTES_PER_HOUR + int(m.group(2))


def minutes_to_hhmm(minutes: Optional[int]) -> str:
    if minutes is None:
        return "00:00"
    sign = "-" if minutes < 0 else ""
    absolute = abs(int(minutes))
    return f"{sign}{absolute // MINUTES_PER_HOUR:02d}:{absolute % MINUTES_PER_HOUR:02d}"


def span_minutes(start: Optional[int], end: Optional[int]) -> int:
    """Length of a start/end pair; missing or inverted pairs count as zero."""
    if start is None or end is None or end <= start:
        return 0
    return end - start


def normalize_tolerance(value: Any) -> int:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


def resolve_day_type(day: date, is_holiday: bool = False) -> DayType:
    if is_holiday:
        return DayType.HOLIDAY
    weekday = day.weekday()
    if weekday == 5:
        return DayType.SATURDAY
    if weekday == 6:
        return DayType.SUNDAY
    return DayType.WEEKDAY


def weekday_label(day: date) -> str:
    return _WEEKDAY_LABELS[day.weekday()]


@dataclass(frozen=True, order=True)
class YearMonth:
    """A competence month, exchanged as a ``YYYY-MM`` token."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12 or not 1 <= int(self.year) <= 9999:
            raise InvalidPeriodTokenError(
                f"Invalid year-month {self.year}-{self.month}", field="year_month"
            )

    @classmethod
    def of(cls, year: Any, month: Any) -> "YearMonth":
        try:
            return cls(int(year), int(month))
        except (TypeError, ValueError):
            raise InvalidPeriodTokenError(f"Invalid year-month {year}-{month}", field="year_month")

    @classmethod
    def parse(cls, token: Optional[str]) -> "YearMonth":
        m = _YEAR_MONTH.match((token or "").strip())
        if not m:
            raise InvalidPeriodTokenError(
                f"'{token}' is not a valid year-month (expected YYYY-MM)", field="year_month"
            )
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def from_date(cls, day: date) -> "YearMonth":
        return cls(day.year, day.month)

    @property
    def token(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def days(self) -> Iterator[date]:
        day = self.first_day
        last = self.last_day
        while day <= last:
            yield day
            day += timedelta(days=1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return self.token
