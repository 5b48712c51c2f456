from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional

from ..classification.model import DayClassification
from ..common.datetime_utils import YearMonth
from ..core.enums import CompensationPolicy
from ..employees.model import Employee
from ..ledger.model import LedgerEntry, LedgerTotals
from ..punches.model import DailyPunchRecord


@dataclass(frozen=True)
class MonthContext:
    """Everything the aggregator reads for one employee and month.

    Built per request and discarded afterwards.
    """

    employee: Employee
    year_month: YearMonth
    salary: Decimal
    holidays: frozenset[date]
    punches: Mapping[date, DailyPunchRecord]
    ledger: LedgerTotals

    def record_for(self, day: date) -> Optional[DailyPunchRecord]:
        return self.punches.get(day)

    def is_holiday(self, day: date) -> bool:
        record = self.punches.get(day)
        return day in self.holidays or bool(record and record.is_holiday)


@dataclass(frozen=True)
class MoneyPreview:
    payable_ordinary: Decimal = Decimal("0.00")
    payable_premium: Decimal = Decimal("0.00")
    deduction: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class MonthlySummary:
    employee_id: int
    employee_name: str
    year_month: YearMonth
    policy: CompensationPolicy
    zero_at_month_end: bool
    days: tuple[DayClassification, ...]

    ordinary_overtime_min: int
    premium_overtime_min: int
    deficit_min: int

    carry_over_min: int
    manual_entries_min: int
    closure_entries_min: int
    technical_balance_min: int

    offset_ordinary_min: int
    offset_premium_min: int
    payable_ordinary_min: int
    payable_premium_min: int
    deduct_min: int

    final_balance_min: int
    closing_adjustment_min: int

    hourly_rate: Decimal
    money: MoneyPreview = field(default_factory=MoneyPreview)
    dept_name: Optional[str] = None
    entries: tuple[LedgerEntry, ...] = ()

    @property
    def credits_min(self) -> int:
        return self.ordinary_overtime_min + self.premium_overtime_min

    @property
    def debits_min(self) -> int:
        return self.deficit_min

    @property
    def month_impact_min(self) -> int:
        return sum(d.impact_minutes for d in self.days)
