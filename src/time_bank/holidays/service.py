from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Sequence

from ..common.datetime_utils import YearMonth
from ..common.validators import clean_note
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_all(self) -> Sequence[Holiday]:
        return self._holidays.list_all()

    def upsert(self, *, day: int, month: int, description: str = "") -> int:
        try:
            day, month = int(day), int(month)
        except (TypeError, ValueError):
            raise ValidationError("Holiday day/month must be numbers", field="day")
        if not 1 <= month <= 12:
            raise ValidationError("Holiday month must be between 1 and 12", field="month")
        # Leap year so that 29/02 is accepted.
        if not 1 <= day <= calendar.monthrange(2000, month)[1]:
            raise ValidationError("Holiday day is out of range for the month", field="day")

        holiday_id = self._holidays.upsert(day=day, month=month, description=clean_note(description, "description") or "")
        logger.info("Holiday %02d/%02d saved (id=%s)", day, month, holiday_id)
        return holiday_id

    def deactivate(self, *, holiday_id: int) -> None:
        if not self._holidays.deactivate(holiday_id=int(holiday_id)):
            raise NotFoundError(f"Holiday {holiday_id} not found", field="holiday_id")
        logger.info("Holiday %s deactivated", holiday_id)

    def holiday_dates(self, year_month: YearMonth) -> frozenset[date]:
        """Dates of ``year_month`` that fall on an active holiday."""
        out = set()
        for h in self._holidays.list_all(only_active=True):
            if h.month != year_month.month:
                continue
            if h.day <= year_month.last_day.day:
                out.add(date(year_month.year, year_month.month, h.day))
        return frozenset(out)
