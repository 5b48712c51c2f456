from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import YearMonth, now_local
from ..core.enums import PeriodStatus
from ..core.exceptions import InvalidTransitionError, LockedPeriodError
from .model import PeriodRecord
from .repository import PeriodRepository

logger = logging.getLogger(__name__)

# Legal (from, to) pairs. NOT_STARTED is never re-entered.
_TRANSITIONS = {
    (PeriodStatus.NOT_STARTED, PeriodStatus.OPEN),
    (PeriodStatus.OPEN, PeriodStatus.CLOSED),
    (PeriodStatus.CLOSED, PeriodStatus.OPEN),
}


class PeriodService:
    """State machine gating edits of an employee's year-month.

    NOT_STARTED -> OPEN on the first write, OPEN -> CLOSED on close,
    CLOSED -> OPEN on reopen. Concurrent writers for the same employee and
    month are serialized by the store, not here.
    """

    def __init__(self, periods: PeriodRepository, *, clock: Callable[[], datetime] = now_local):
        self._periods = periods
        self._clock = clock

    def get(self, employee_id: int, year_month: YearMonth) -> PeriodRecord:
        record = self._periods.get(employee_id=int(employee_id), year=year_month.year, month=year_month.month)
        return record or PeriodRecord.not_started(employee_id, year_month)

    def status_of(self, employee_id: int, year_month: YearMonth) -> PeriodStatus:
        return self.get(employee_id, year_month).status

    def check_writable(self, employee_id: int, year_month: YearMonth) -> PeriodStatus:
        """Raise LockedPeriodError when the month is closed; return its current status."""
        status = self.status_of(employee_id, year_month)
        if status is PeriodStatus.CLOSED:
            logger.warning("Write rejected: period %s of employee %s is closed", year_month, employee_id)
            raise LockedPeriodError(f"Period {year_month} is closed for employee {employee_id}", field="year_month")
        return status

    def mark_started(
        self, employee_id: int, year_month: YearMonth, status: PeriodStatus, *, actor: Optional[str] = None
    ) -> PeriodStatus:
        """Open a never-touched month once its first write has been stored."""
        if status is PeriodStatus.NOT_STARTED:
            self._move(employee_id, year_month, status, PeriodStatus.OPEN, actor)
            return PeriodStatus.OPEN
        return status

    def ensure_writable(self, employee_id: int, year_month: YearMonth, *, actor: Optional[str] = None) -> PeriodStatus:
        """Check that punches/manual entries of the month may change.

        A never-touched month is opened on the way.
        """
        status = self.check_writable(employee_id, year_month)
        return self.mark_started(employee_id, year_month, status, actor=actor)

    def close(self, employee_id: int, year_month: YearMonth, *, actor: Optional[str] = None) -> PeriodRecord:
        current = self.status_of(employee_id, year_month)
        if current is not PeriodStatus.OPEN:
            raise InvalidTransitionError(
                f"Only an OPEN period can be closed ({year_month} is {current.value})", field="status"
            )
        return self._move(employee_id, year_month, current, PeriodStatus.CLOSED, actor)

    def reopen(self, employee_id: int, year_month: YearMonth, *, actor: Optional[str] = None) -> PeriodRecord:
        current = self.status_of(employee_id, year_month)
        if current is not PeriodStatus.CLOSED:
            raise InvalidTransitionError(
                f"Only a CLOSED period can be reopened ({year_month} is {current.value})", field="status"
            )
        return self._move(employee_id, year_month, current, PeriodStatus.OPEN, actor)

    def list_available(
        self,
        employee_id: int,
        year: int,
        *,
        statuses: Optional[Iterable[PeriodStatus]] = None,
    ) -> Sequence[PeriodRecord]:
        wanted = list(statuses) if statuses else [PeriodStatus.OPEN, PeriodStatus.CLOSED]
        # NOT_STARTED rows are implicit and never listed.
        wanted = [s for s in wanted if s is not PeriodStatus.NOT_STARTED]
        return self._periods.list_for_year(employee_id=int(employee_id), year=int(year), statuses=wanted)

    def _move(
        self,
        employee_id: int,
        year_month: YearMonth,
        current: PeriodStatus,
        target: PeriodStatus,
        actor: Optional[str],
    ) -> PeriodRecord:
        if (current, target) not in _TRANSITIONS:
            raise InvalidTransitionError(f"{current.value} -> {target.value} is not allowed", field="status")

        now = self._clock()
        self._periods.save_status(
            employee_id=int(employee_id),
            year=year_month.year,
            month=year_month.month,
            status=target,
            updated_at=now,
            updated_by=actor,
        )
        logger.info(
            "Period %s of employee %s: %s -> %s (by %s)",
            year_month, employee_id, current.value, target.value, actor or "-",
        )
        return PeriodRecord(
            employee_id=int(employee_id),
            year=year_month.year,
            month=year_month.month,
            status=target,
            updated_at=now,
            updated_by=actor,
        )
