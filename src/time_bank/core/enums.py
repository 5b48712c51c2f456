from __future__ import annotations

from enum import Enum


class Occurrence(str, Enum):
    """Occurrence tag stored on a daily punch record."""

    NORMAL = "NORMAL"
    JUSTIFIED_ABSENCE = "JUSTIFIED_ABSENCE"
    UNJUSTIFIED_ABSENCE = "UNJUSTIFIED_ABSENCE"
    VACATION = "VACATION"

    @property
    def is_absence(self) -> bool:
        return self in (Occurrence.JUSTIFIED_ABSENCE, Occurrence.UNJUSTIFIED_ABSENCE)


class DayType(str, Enum):
    WEEKDAY = "WEEKDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"
    HOLIDAY = "HOLIDAY"


class DayCategory(str, Enum):
    """Category a classified day contributes to."""

    NORMAL = "NORMAL"
    ORDINARY_OVERTIME = "ORDINARY_OVERTIME"
    PREMIUM_OVERTIME = "PREMIUM_OVERTIME"
    DEFICIT = "DEFICIT"
    JUSTIFIED_ABSENCE = "JUSTIFIED_ABSENCE"
    UNJUSTIFIED_ABSENCE = "UNJUSTIFIED_ABSENCE"


class LedgerEntryKind(str, Enum):
    MANUAL_ADJUSTMENT = "MANUAL_ADJUSTMENT"
    CLOSURE_PAYOUT = "CLOSURE_PAYOUT"
    CLOSURE_DEDUCTION = "CLOSURE_DEDUCTION"

    @property
    def is_closure(self) -> bool:
        return self is not LedgerEntryKind.MANUAL_ADJUSTMENT


class PeriodStatus(str, Enum):
    """Editing state of an employee's year-month."""

    NOT_STARTED = "NOT_STARTED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class CompensationPolicy(str, Enum):
    """How deficit hours are treated against overtime when paying out."""

    OFFSET_AGAINST_OVERTIME = "OFFSET_AGAINST_OVERTIME"
    ALWAYS_DEDUCT = "ALWAYS_DEDUCT"
