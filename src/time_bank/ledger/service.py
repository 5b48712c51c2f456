from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import YearMonth, now_local
from ..common.validators import clean_note
from ..core.enums import LedgerEntryKind
from ..core.exceptions import EmployeeNotFoundError, InvalidAdjustmentError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..periods.service import PeriodService
from .model import LedgerEntry, LedgerTotals, NewLedgerEntry
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Append-only adjustment ledger.

    The balance carried into a month is always re-derived by summing every
    earlier entry; no running total is stored.
    """

    def __init__(
        self,
        ledger: LedgerRepository,
        employees: EmployeeRepository,
        periods: PeriodService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._ledger = ledger
        self._employees = employees
        self._periods = periods
        self._clock = clock

    @staticmethod
    def _validate(entry: NewLedgerEntry) -> Optional[str]:
        if not isinstance(entry.year_month, YearMonth):
            raise InvalidAdjustmentError("year_month must be a YYYY-MM token", field="year_month")
        if not isinstance(entry.kind, LedgerEntryKind):
            raise InvalidAdjustmentError(f"Unknown ledger entry kind {entry.kind!r}", field="kind")
        if isinstance(entry.minutes, bool) or not isinstance(entry.minutes, int):
            raise InvalidAdjustmentError("minutes must be an integer", field="minutes")
        if entry.minutes == 0:
            raise InvalidAdjustmentError("minutes must be non-zero", field="minutes")
        return clean_note(entry.note)

    def append(self, entry: NewLedgerEntry) -> LedgerEntry:
        note = self._validate(entry)
        created_at = self._clock()
        entry_id = self._ledger.insert(
            employee_id=int(entry.employee_id),
            year_month=entry.year_month,
            minutes=entry.minutes,
            kind=entry.kind,
            note=note,
            created_at=created_at,
        )
        logger.info(
            "Ledger entry %s posted: employee=%s month=%s kind=%s minutes=%+d",
            entry_id, entry.employee_id, entry.year_month, entry.kind.value, entry.minutes,
        )
        return LedgerEntry(
            entry_id=entry_id,
            employee_id=int(entry.employee_id),
            year_month=entry.year_month,
            minutes=entry.minutes,
            kind=entry.kind,
            created_at=created_at,
            note=note,
        )

    def get(self, entry_id: int) -> LedgerEntry:
        entry = self._ledger.get(entry_id=int(entry_id))
        if not entry:
            raise NotFoundError(f"Ledger entry {entry_id} not found", field="entry_id")
        return entry

    def remove(self, entry_id: int) -> LedgerEntry:
        """Undo a manual adjustment. Closure postings are permanent."""
        entry = self.get(entry_id)
        if entry.kind is not LedgerEntryKind.MANUAL_ADJUSTMENT:
            raise InvalidAdjustmentError(
                f"Ledger entry {entry_id} is a {entry.kind.value} posting and cannot be deleted", field="entry_id"
            )
        if not self._ledger.delete(entry_id=entry.entry_id):
            raise NotFoundError(f"Ledger entry {entry_id} not found", field="entry_id")
        logger.info("Ledger entry %s removed (employee=%s month=%s)", entry_id, entry.employee_id, entry.year_month)
        return entry

    def add_manual_adjustment(
        self,
        *,
        employee_id: int,
        day: date,
        minutes: int,
        note: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> LedgerEntry:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(f"Employee {employee_id} not found", field="employee_id")

        entry = NewLedgerEntry(
            employee_id=int(employee_id),
            year_month=YearMonth.from_date(day),
            minutes=minutes,
            kind=LedgerEntryKind.MANUAL_ADJUSTMENT,
            note=note,
        )
        self._validate(entry)
        status = self._periods.check_writable(entry.employee_id, entry.year_month)
        stored = self.append(entry)
        self._periods.mark_started(entry.employee_id, entry.year_month, status, actor=actor)
        return stored

    def remove_manual_adjustment(self, entry_id: int, *, actor: Optional[str] = None) -> LedgerEntry:
        entry = self.get(entry_id)
        if entry.kind is not LedgerEntryKind.MANUAL_ADJUSTMENT:
            return self.remove(entry.entry_id)
        status = self._periods.check_writable(entry.employee_id, entry.year_month)
        removed = self.remove(entry.entry_id)
        self._periods.mark_started(entry.employee_id, entry.year_month, status, actor=actor)
        return removed

    def list_entries(self, employee_id: int, up_to: YearMonth) -> Sequence[LedgerEntry]:
        return self._ledger.list_up_to(employee_id=int(employee_id), up_to=up_to)

    def carry_over_balance(self, employee_id: int, before: YearMonth) -> int:
        return sum(e.minutes for e in self.list_entries(employee_id, before) if e.year_month < before)

    @staticmethod
    def month_totals(entries: Sequence[LedgerEntry], year_month: YearMonth) -> LedgerTotals:
        return LedgerTotals.from_entries(entries, year_month)
