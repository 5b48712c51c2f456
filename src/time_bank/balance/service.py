from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..classification.classifier import DayClassifier
from ..common.datetime_utils import YearMonth, resolve_day_type
from ..core.constants import MINUTES_PER_HOUR, MONEY_QUANTUM
from ..core.enums import CompensationPolicy, DayCategory
from ..core.exceptions import EmployeeNotFoundError
from ..employees.repository import EmployeeRepository
from ..holidays.service import HolidayService
from ..ledger.service import LedgerService
from ..punches.repository import PunchRepository
from .calculator import calculator_for
from .model import MoneyPreview, MonthContext, MonthlySummary

logger = logging.getLogger(__name__)


def hourly_rate(salary: Decimal, reference_hours: Decimal) -> Decimal:
    hours = Decimal(reference_hours or 0)
    if hours <= 0:
        return Decimal("0")
    return Decimal(salary or 0) / hours


def minutes_to_money(minutes: int, rate: Decimal) -> Decimal:
    amount = Decimal(int(minutes)) * rate / MINUTES_PER_HOUR
    return amount.quantize(Decimal(MONEY_QUANTUM), rounding=ROUND_HALF_UP)


class MonthlyAggregator:
    """Build the time-bank summary of one employee for one month.

    Nothing is cached or written: the same stored punches, holidays and
    ledger entries always yield the same summary.
    """

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        punches: PunchRepository,
        ledger: LedgerService,
        holidays: HolidayService,
        classifier: Optional[DayClassifier] = None,
    ):
        self._employees = employees
        self._punches = punches
        self._ledger = ledger
        self._holidays = holidays
        self._classifier = classifier or DayClassifier()

    def load_context(self, employee_id: int, year_month: YearMonth) -> MonthContext:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(f"Employee {employee_id} not found", field="employee_id")

        salary = self._employees.get_salary_for_range(
            employee_id=employee.employee_id, start=year_month.first_day, end=year_month.last_day
        )
        records = self._punches.list_range(
            employee_id=employee.employee_id, start=year_month.first_day, end=year_month.last_day
        )
        entries = self._ledger.list_entries(employee.employee_id, year_month)

        return MonthContext(
            employee=employee,
            year_month=year_month,
            salary=employee.base_salary if salary is None else salary,
            holidays=self._holidays.holiday_dates(year_month),
            punches={r.work_date: r for r in records},
            ledger=LedgerService.month_totals(entries, year_month),
        )

    def summarize(
        self,
        *,
        employee_id: int,
        year_month: YearMonth,
        policy: CompensationPolicy = CompensationPolicy.OFFSET_AGAINST_OVERTIME,
        zero_at_month_end: bool = False,
    ) -> MonthlySummary:
        ctx = self.load_context(employee_id, year_month)
        return self.summarize_context(ctx, policy=policy, zero_at_month_end=zero_at_month_end)

    def summarize_context(
        self,
        ctx: MonthContext,
        *,
        policy: CompensationPolicy,
        zero_at_month_end: bool = False,
    ) -> MonthlySummary:
        schedule = ctx.employee.schedule
        days = tuple(
            self._classifier.classify(
                work_date=day,
                record=ctx.record_for(day),
                schedule=schedule,
                day_type=resolve_day_type(day, ctx.is_holiday(day)),
            )
            for day in ctx.year_month.days()
        )

        ordinary = sum(d.impact_minutes for d in days if d.category is DayCategory.ORDINARY_OVERTIME)
        premium = sum(d.impact_minutes for d in days if d.category is DayCategory.PREMIUM_OVERTIME)
        deficit = sum(d.impact_minutes for d in days if d.impact_minutes < 0)

        ledger = ctx.ledger
        technical = ledger.carry_over_min + ordinary + premium + deficit + ledger.manual_min + ledger.closure_min

        settlement = calculator_for(policy).settle(
            ordinary_overtime_min=ordinary, premium_overtime_min=premium, deficit_min=deficit
        )

        rate = hourly_rate(ctx.salary, ctx.employee.monthly_reference_hours)
        money = MoneyPreview(
            payable_ordinary=minutes_to_money(settlement.payable_ordinary_min, rate),
            payable_premium=minutes_to_money(settlement.payable_premium_min, rate),
            deduction=minutes_to_money(settlement.deduct_min, rate),
        )

        logger.debug(
            "Summary employee=%s month=%s policy=%s technical=%+d",
            ctx.employee.employee_id, ctx.year_month, policy.value, technical,
        )

        return MonthlySummary(
            employee_id=ctx.employee.employee_id,
            employee_name=ctx.employee.full_name,
            dept_name=ctx.employee.dept_name,
            year_month=ctx.year_month,
            policy=policy,
            zero_at_month_end=bool(zero_at_month_end),
            days=days,
            ordinary_overtime_min=ordinary,
            premium_overtime_min=premium,
            deficit_min=deficit,
            carry_over_min=ledger.carry_over_min,
            manual_entries_min=ledger.manual_min,
            closure_entries_min=ledger.closure_min,
            technical_balance_min=technical,
            offset_ordinary_min=settlement.offset_ordinary_min,
            offset_premium_min=settlement.offset_premium_min,
            payable_ordinary_min=settlement.payable_ordinary_min,
            payable_premium_min=settlement.payable_premium_min,
            deduct_min=settlement.deduct_min,
            final_balance_min=0 if zero_at_month_end else technical,
            closing_adjustment_min=-technical if zero_at_month_end else 0,
            hourly_rate=rate,
            money=money,
            entries=ledger.current_entries,
        )
