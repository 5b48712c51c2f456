from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_hhmm, span_minutes, weekday_label
from ..core.enums import DayType, Occurrence
from ..core.exceptions import InvalidTimeFormatError
from ..punches.model import DailyPunchRecord
from ..schedules.model import WorkSchedule
from .factory import ClassificationStrategyFactory
from .model import DayClassification
from .strategies.base import DayFigures


def _minutes_or_none(value: Optional[str]) -> Optional[int]:
    # Stored punches are validated on save; anything unreadable counts as not punched.
    try:
        return parse_hhmm(value)
    except InvalidTimeFormatError:
        return None


def worked_minutes(record: Optional[DailyPunchRecord]) -> int:
    if record is None:
        return 0
    return sum(span_minutes(_minutes_or_none(start), _minutes_or_none(end)) for _, start, end in record.pairs())


class DayClassifier:
    """Classify a single day against the expected schedule."""

    def __init__(self, *, strategy_factory: ClassificationStrategyFactory | None = None):
        self._factory = strategy_factory or ClassificationStrategyFactory()

    def classify(
        self,
        *,
        work_date: date,
        record: Optional[DailyPunchRecord],
        schedule: Optional[WorkSchedule],
        day_type: DayType,
    ) -> DayClassification:
        occurrence = record.occurrence if record else Occurrence.NORMAL

        if occurrence is Occurrence.NORMAL:
            worked = worked_minutes(record)
        else:
            worked = 0

        expected = 0
        if schedule and day_type is DayType.WEEKDAY and occurrence is not Occurrence.VACATION:
            expected = schedule.expected_minutes
        tolerance = schedule.tolerance_minutes if schedule else 0

        diff = worked - expected
        if abs(diff) <= tolerance:
            diff = 0

        figures = DayFigures(day_type=day_type, occurrence=occurrence, expected=expected, worked=worked, diff=diff)
        decision = self._factory.for_day(occurrence=occurrence, day_type=day_type).decide(figures)

        return DayClassification(
            work_date=work_date,
            weekday=weekday_label(work_date),
            day_type=day_type,
            occurrence=occurrence,
            expected_minutes=expected,
            worked_minutes=worked,
            diff_minutes=diff,
            category=decision.category,
            impact_minutes=decision.impact,
        )
