from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import YearMonth, minutes_to_hhmm, parse_hhmm, parse_iso_date
from ..common.validators import clean_note
from ..core.enums import Occurrence
from ..core.exceptions import EmployeeNotFoundError, InvalidTimeFormatError, ValidationError
from ..employees.repository import EmployeeRepository
from ..holidays.repository import AbsenceReasonRepository
from ..periods.service import PeriodService
from .model import DailyPunchRecord
from .repository import PunchRepository

logger = logging.getLogger(__name__)

_TIME_FIELDS = ("morning_in", "morning_out", "afternoon_in", "afternoon_out", "extra_in", "extra_out")
_FLAG_VALUES = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False, "": False}


def _flag(value: Any, field_name: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _FLAG_VALUES:
        return _FLAG_VALUES[value.strip().lower()]
    raise ValidationError(f"{field_name} must be true or false", field=field_name)


def record_from_payload(employee_id: int, payload: Mapping[str, Any]) -> DailyPunchRecord:
    """Build a punch record from a JSON object.

    Only the shape is checked here (date, occurrence, reason id); times are
    validated when the month is saved.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Each record must be an object", field="records")

    raw_date = payload.get("work_date") or payload.get("date")
    if isinstance(raw_date, date):
        work_date = raw_date
    else:
        try:
            work_date = parse_iso_date(str(raw_date or "").strip())
        except ValueError:
            raise ValidationError(f"Invalid record date '{raw_date}' (expected YYYY-MM-DD)", field="work_date")

    raw_occurrence = payload.get("occurrence") or Occurrence.NORMAL.value
    try:
        occurrence = Occurrence(str(raw_occurrence).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown occurrence '{raw_occurrence}'", field="occurrence")

    reason = payload.get("absence_reason_id")
    if reason in (None, ""):
        reason_id = None
    else:
        try:
            reason_id = int(reason)
        except (TypeError, ValueError):
            raise ValidationError("absence_reason_id must be a number", field="absence_reason_id")

    times = {}
    for name in _TIME_FIELDS:
        value = payload.get(name)
        times[name] = None if value is None else str(value)

    return DailyPunchRecord(
        employee_id=int(employee_id),
        work_date=work_date,
        occurrence=occurrence,
        absence_reason_id=reason_id,
        note=None if payload.get("note") is None else str(payload.get("note")),
        is_holiday=_flag(payload.get("is_holiday"), "is_holiday"),
        **times,
    )


def _normalized(record: DailyPunchRecord) -> DailyPunchRecord:
    """Validate the time pairs of ``record`` and return it with canonical HH:MM tokens."""
    changes = {}
    for pair, start, end in record.pairs():
        start_min = parse_hhmm(start, field=f"{pair}_in")
        end_min = parse_hhmm(end, field=f"{pair}_out")
        if start_min is not None and end_min is not None and end_min < start_min:
            raise InvalidTimeFormatError(
                f"{record.work_date.isoformat()}: {pair} exit {end} is before entry {start}", field=f"{pair}_out"
            )
        changes[f"{pair}_in"] = None if start_min is None else minutes_to_hhmm(start_min)
        changes[f"{pair}_out"] = None if end_min is None else minutes_to_hhmm(end_min)

    changes["note"] = clean_note(record.note)
    return replace(record, **changes)


class PunchService:
    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        periods: PeriodService,
        absence_reasons: AbsenceReasonRepository,
    ):
        self._punches = punches
        self._employees = employees
        self._periods = periods
        self._absence_reasons = absence_reasons

    def _check_reason(self, record: DailyPunchRecord, known: set[int]) -> None:
        reason_id = record.absence_reason_id
        if reason_id is None or reason_id in known:
            return
        reason = self._absence_reasons.get_by_id(reason_id)
        if not reason or not reason.is_active:
            raise ValidationError(
                f"{record.work_date.isoformat()}: unknown absence reason {reason_id}", field="absence_reason_id"
            )
        known.add(reason_id)

    def list_month(self, employee_id: int, year_month: YearMonth) -> Sequence[DailyPunchRecord]:
        return self._punches.list_range(
            employee_id=int(employee_id), start=year_month.first_day, end=year_month.last_day
        )

    def save_day_records(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        records: Iterable[DailyPunchRecord],
        actor: Optional[str] = None,
    ) -> int:
        """Replace the punches of a whole month. Returns the number of stored records."""
        employee_id = int(employee_id)
        year_month = YearMonth.of(year, month)

        if not self._employees.get_by_id(employee_id):
            raise EmployeeNotFoundError(f"Employee {employee_id} not found", field="employee_id")

        cleaned: list[DailyPunchRecord] = []
        seen: set[date] = set()
        reasons: set[int] = set()
        for record in records:
            if not year_month.contains(record.work_date):
                raise ValidationError(
                    f"Record date {record.work_date.isoformat()} is outside {year_month}", field="work_date"
                )
            if record.work_date in seen:
                raise ValidationError(f"Duplicate record for {record.work_date.isoformat()}", field="work_date")
            seen.add(record.work_date)

            record = _normalized(replace(record, employee_id=employee_id))
            if not record.is_blank():
                self._check_reason(record, reasons)
                cleaned.append(record)

        status = self._periods.check_writable(employee_id, year_month)

        cleaned.sort(key=lambda r: r.work_date)
        stored = self._punches.replace_range(
            employee_id=employee_id,
            start=year_month.first_day,
            end=year_month.last_day,
            records=cleaned,
        )
        self._periods.mark_started(employee_id, year_month, status, actor=actor)
        logger.info("Punches of employee %s for %s saved: %s record(s) (by %s)", employee_id, year_month, stored, actor or "-")
        return stored
