from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import YearMonth
from ..core.enums import CompensationPolicy, PeriodStatus


@dataclass(frozen=True)
class PeriodRecord:
    """Editing state of one employee's year-month."""

    employee_id: int
    year: int
    month: int
    status: PeriodStatus
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    @property
    def year_month(self) -> YearMonth:
        return YearMonth(self.year, self.month)

    @classmethod
    def not_started(cls, employee_id: int, year_month: YearMonth) -> "PeriodRecord":
        return cls(
            employee_id=int(employee_id),
            year=year_month.year,
            month=year_month.month,
            status=PeriodStatus.NOT_STARTED,
        )


@dataclass(frozen=True)
class PeriodClosing:
    """Figures of a month as they stood when it was closed.

    Written on every close; a later reopen only stamps ``reopened_at``.
    """

    employee_id: int
    year: int
    month: int
    policy: CompensationPolicy
    zero_at_month_end: bool
    carry_over_min: int
    ordinary_overtime_min: int
    premium_overtime_min: int
    deficit_min: int
    adjustments_min: int
    final_balance_min: int
    payable_ordinary_min: int = 0
    payable_premium_min: int = 0
    deduct_min: int = 0
    amount_to_pay: Decimal = Decimal("0.00")
    amount_to_deduct: Decimal = Decimal("0.00")
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    reopened_at: Optional[datetime] = None
    reopened_by: Optional[str] = None

    @property
    def year_month(self) -> YearMonth:
        return YearMonth(self.year, self.month)
