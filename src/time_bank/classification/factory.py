from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import DayType, Occurrence
from .strategies.absence_strategy import AbsenceStrategy
from .strategies.base import ClassificationStrategy
from .strategies.premium_day_strategy import PremiumDayStrategy
from .strategies.vacation_strategy import VacationStrategy
from .strategies.weekday_strategy import WeekdayStrategy


@dataclass
class ClassificationStrategyFactory:
    """Factory Pattern: choose the strategy for a day.

    Order matters: the occurrence tag is looked at before the day type, so an
    absence on a holiday is still an absence.
    """

    vacation: ClassificationStrategy = field(default_factory=VacationStrategy)
    absence: ClassificationStrategy = field(default_factory=AbsenceStrategy)
    premium_day: ClassificationStrategy = field(default_factory=PremiumDayStrategy)
    weekday: ClassificationStrategy = field(default_factory=WeekdayStrategy)

    def for_day(self, *, occurrence: Occurrence, day_type: DayType) -> ClassificationStrategy:
        if occurrence is Occurrence.VACATION:
            return self.vacation
        if occurrence in (Occurrence.JUSTIFIED_ABSENCE, Occurrence.UNJUSTIFIED_ABSENCE):
            return self.absence
        if occurrence is not Occurrence.NORMAL:
            raise ValueError(f"Unhandled occurrence {occurrence!r}")

        if day_type in (DayType.HOLIDAY, DayType.SUNDAY, DayType.SATURDAY):
            return self.premium_day
        if day_type is DayType.WEEKDAY:
            return self.weekday
        raise ValueError(f"Unhandled day type {day_type!r}")
