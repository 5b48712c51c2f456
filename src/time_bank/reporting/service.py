from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..balance.model import MonthlySummary
from ..balance.service import MonthlyAggregator
from ..common.datetime_utils import YearMonth
from ..core.enums import CompensationPolicy, LedgerEntryKind, PeriodStatus
from ..core.exceptions import EmployeeNotFoundError
from ..employees.repository import EmployeeRepository
from ..ledger.model import LedgerEntry, NewLedgerEntry
from ..ledger.service import LedgerService
from ..periods.closing_repository import ClosingRepository
from ..periods.model import PeriodClosing, PeriodRecord
from ..periods.service import PeriodService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollupRow:
    employee_id: int
    full_name: str
    dept_name: Optional[str]
    carry_over_min: int
    credits_min: int
    debits_min: int
    manual_min: int
    closure_min: int
    premium_paid_min: int
    balance_min: int


@dataclass(frozen=True)
class CloseResult:
    period: PeriodRecord
    settlement_entry: Optional[LedgerEntry] = None
    closing: Optional[PeriodClosing] = None


class ReportingService:
    """Facade used by the controllers: summaries, roll-up and month closing."""

    def __init__(
        self,
        *,
        aggregator: MonthlyAggregator,
        ledger: LedgerService,
        periods: PeriodService,
        employees: EmployeeRepository,
        closings: ClosingRepository,
        default_policy: CompensationPolicy = CompensationPolicy.OFFSET_AGAINST_OVERTIME,
    ):
        self._aggregator = aggregator
        self._ledger = ledger
        self._periods = periods
        self._employees = employees
        self._closings = closings
        self._default_policy = default_policy

    @property
    def default_policy(self) -> CompensationPolicy:
        return self._default_policy

    def get_monthly_summary(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        policy: Optional[CompensationPolicy] = None,
        zero_at_month_end: bool = False,
    ) -> MonthlySummary:
        return self._aggregator.summarize(
            employee_id=int(employee_id),
            year_month=YearMonth.of(year, month),
            policy=policy or self._default_policy,
            zero_at_month_end=zero_at_month_end,
        )

    def fleet_rollup(
        self,
        year_month: YearMonth,
        *,
        policy: Optional[CompensationPolicy] = None,
        department_id: Optional[int] = None,
    ) -> list[RollupRow]:
        rows = []
        for employee in self._employees.list_active(dept_id=department_id):
            summary = self._aggregator.summarize(
                employee_id=employee.employee_id,
                year_month=year_month,
                policy=policy or self._default_policy,
            )
            rows.append(
                RollupRow(
                    employee_id=employee.employee_id,
                    full_name=employee.full_name,
                    dept_name=employee.dept_name,
                    carry_over_min=summary.carry_over_min,
                    credits_min=summary.credits_min,
                    debits_min=summary.debits_min,
                    manual_min=summary.manual_entries_min,
                    closure_min=summary.closure_entries_min,
                    premium_paid_min=summary.payable_premium_min,
                    balance_min=summary.technical_balance_min,
                )
            )
        rows.sort(key=lambda r: (r.full_name.casefold(), r.employee_id))
        return rows

    def close_period(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        actor: Optional[str] = None,
        settle: bool = False,
        policy: Optional[CompensationPolicy] = None,
    ) -> CloseResult:
        """Close a month and store its closing snapshot.

        With ``settle`` the technical balance is zeroed by a closure posting first.
        """
        year_month = YearMonth.of(year, month)
        current = self._periods.status_of(employee_id, year_month)
        if current is not PeriodStatus.OPEN:
            # close() raises the InvalidTransitionError.
            self._periods.close(employee_id, year_month, actor=actor)

        summary = self.get_monthly_summary(
            employee_id=employee_id, year=year, month=month, policy=policy, zero_at_month_end=settle
        )
        entry = None
        balance = summary.technical_balance_min
        if settle and balance:
            kind = LedgerEntryKind.CLOSURE_PAYOUT if balance > 0 else LedgerEntryKind.CLOSURE_DEDUCTION
            entry = self._ledger.append(
                NewLedgerEntry(
                    employee_id=int(employee_id),
                    year_month=year_month,
                    minutes=-balance,
                    kind=kind,
                    note=f"Settlement at closing of {year_month}",
                )
            )
            logger.info(
                "Settled %s for employee %s: %s %+d min (by %s)",
                year_month, employee_id, kind.value, -balance, actor or "-",
            )

        period = self._periods.close(employee_id, year_month, actor=actor)
        closing = self._snapshot(summary, closed_at=period.updated_at, closed_by=actor)
        self._closings.save(closing)
        return CloseResult(period=period, settlement_entry=entry, closing=closing)

    @staticmethod
    def _snapshot(summary: MonthlySummary, *, closed_at: Optional[datetime], closed_by: Optional[str]) -> PeriodClosing:
        return PeriodClosing(
            employee_id=summary.employee_id,
            year=summary.year_month.year,
            month=summary.year_month.month,
            policy=summary.policy,
            zero_at_month_end=summary.zero_at_month_end,
            carry_over_min=summary.carry_over_min,
            ordinary_overtime_min=summary.ordinary_overtime_min,
            premium_overtime_min=summary.premium_overtime_min,
            deficit_min=summary.deficit_min,
            adjustments_min=summary.manual_entries_min,
            final_balance_min=summary.final_balance_min,
            payable_ordinary_min=summary.payable_ordinary_min,
            payable_premium_min=summary.payable_premium_min,
            deduct_min=summary.deduct_min,
            amount_to_pay=summary.money.payable_ordinary + summary.money.payable_premium,
            amount_to_deduct=summary.money.deduction,
            closed_at=closed_at,
            closed_by=closed_by,
        )

    def reopen_period(self, *, employee_id: int, year: int, month: int, actor: Optional[str] = None) -> PeriodRecord:
        period = self._periods.reopen(employee_id, YearMonth.of(year, month), actor=actor)
        self._closings.mark_reopened(
            employee_id=int(employee_id), year=period.year, month=period.month,
            reopened_at=period.updated_at, reopened_by=actor,
        )
        return period

    def get_closing(self, *, employee_id: int, year: int, month: int) -> Optional[PeriodClosing]:
        year_month = YearMonth.of(year, month)
        return self._closings.get(employee_id=int(employee_id), year=year_month.year, month=year_month.month)

    def list_closings(self, *, employee_id: int) -> Sequence[PeriodClosing]:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(f"Employee {employee_id} not found", field="employee_id")
        return self._closings.list_for_employee(employee_id=int(employee_id))

    def period_status(self, *, employee_id: int, year: int, month: int) -> PeriodRecord:
        return self._periods.get(employee_id, YearMonth.of(year, month))

    def add_manual_adjustment(
        self,
        *,
        employee_id: int,
        day: date,
        minutes: int,
        note: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> LedgerEntry:
        return self._ledger.add_manual_adjustment(
            employee_id=employee_id, day=day, minutes=minutes, note=note, actor=actor
        )

    def remove_manual_adjustment(self, entry_id: int, *, actor: Optional[str] = None) -> LedgerEntry:
        return self._ledger.remove_manual_adjustment(entry_id, actor=actor)

    def list_available_periods(
        self,
        *,
        employee_id: int,
        year: int,
        statuses: Optional[Iterable[PeriodStatus]] = None,
    ) -> Sequence[PeriodRecord]:
        return self._periods.list_available(employee_id, year, statuses=statuses)
