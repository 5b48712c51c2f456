from datetime import date
from decimal import Decimal

from time_bank.common.datetime_utils import YearMonth
from time_bank.core.enums import CompensationPolicy, DayCategory, LedgerEntryKind, Occurrence
from time_bank.employees.model import SalaryPeriod
from time_bank.holidays.model import Holiday
from time_bank.ledger.model import NewLedgerEntry

from tests.fakes import build_world, make_employee, punch

MARCH = YearMonth(2025, 3)
FEB = YearMonth(2025, 2)


def _full_march(world, employee_id=1):
    """Punch every weekday of March 2025 exactly on schedule."""
    for day in MARCH.days():
        if day.weekday() < 5:
            world.punches.add(punch(employee_id, day, "08:00", "12:00", "13:00", "17:00"))


def test_full_month_on_schedule_has_zero_balance():
    world = build_world()
    _full_march(world)

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert len(s.days) == 31
    assert s.technical_balance_min == 0
    assert s.deficit_min == 0


def test_totals_come_from_day_impacts():
    world = build_world()
    _full_march(world)
    # Monday 3rd: 30 min extra; Tuesday 4th: 50 min short; Saturday 8th: 2h worked.
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00", "13:00", "17:30"))
    world.punches.add(punch(1, date(2025, 3, 4), "08:00", "12:00", "13:00", "16:10"))
    world.punches.add(punch(1, date(2025, 3, 8), "08:00", "10:00"))

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert s.ordinary_overtime_min == 30
    assert s.premium_overtime_min == 120
    assert s.deficit_min == -50
    assert s.technical_balance_min == 100

    # Ordinary overtime absorbs 30, premium the remaining 20.
    assert (s.offset_ordinary_min, s.offset_premium_min) == (30, 20)
    assert (s.payable_ordinary_min, s.payable_premium_min, s.deduct_min) == (0, 100, 0)


def test_always_deduct_reports_gross_figures():
    world = build_world()
    _full_march(world)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00", "13:00", "17:30"))
    world.punches.add(punch(1, date(2025, 3, 4), "08:00", "12:00", "13:00", "16:10"))

    s = world.container.aggregator.summarize(
        employee_id=1, year_month=MARCH, policy=CompensationPolicy.ALWAYS_DEDUCT
    )
    assert (s.payable_ordinary_min, s.deduct_min) == (30, 50)


def test_reconciliation_invariant_with_ledger_and_carry_over():
    world = build_world()
    _full_march(world)
    world.punches.add(punch(1, date(2025, 3, 5), "08:00", "12:00"))
    ledger = world.container.ledger_service
    ledger.append(NewLedgerEntry(employee_id=1, year_month=FEB, minutes=90))
    ledger.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=-15))
    ledger.append(
        NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=40, kind=LedgerEntryKind.CLOSURE_PAYOUT)
    )
    # Later months never leak into March.
    ledger.append(NewLedgerEntry(employee_id=1, year_month=YearMonth(2025, 4), minutes=999))

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert s.carry_over_min == 90
    assert s.manual_entries_min == -15
    assert s.closure_entries_min == 40
    assert s.technical_balance_min == s.carry_over_min + s.month_impact_min + s.manual_entries_min + s.closure_entries_min
    assert s.technical_balance_min == 90 - 240 - 15 + 40


def test_summary_is_idempotent():
    world = build_world()
    _full_march(world)
    world.punches.add(punch(1, date(2025, 3, 6), "08:00", "12:00", "13:00", "18:00"))

    first = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    second = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert first == second


def test_zero_at_month_end_reports_closing_adjustment_only():
    world = build_world()
    _full_march(world)
    world.punches.add(punch(1, date(2025, 3, 7), "08:00", "12:00", "13:00", "18:00"))

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH, zero_at_month_end=True)
    assert s.technical_balance_min == 60
    assert s.final_balance_min == 0
    assert s.closing_adjustment_min == -60
    assert world.ledger.entries == {}


def test_holiday_calendar_turns_weekday_into_premium_day():
    world = build_world(holidays=[Holiday(holiday_id=1, day=4, month=3, description="Carnival")])
    _full_march(world)

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    carnival = next(d for d in s.days if d.work_date == date(2025, 3, 4))
    assert carnival.category is DayCategory.PREMIUM_OVERTIME
    assert carnival.impact_minutes == 480
    assert s.premium_overtime_min == 480


def test_vacation_days_do_not_create_deficit():
    world = build_world()
    for day in MARCH.days():
        if day.weekday() < 5:
            world.punches.add(punch(1, day, occurrence=Occurrence.VACATION))

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert s.technical_balance_min == 0


def test_money_preview_uses_salary_history():
    employee = make_employee(base_salary=Decimal("2200.00"), monthly_reference_hours=Decimal("220"))
    world = build_world(employee)
    world.employees.salaries.append(SalaryPeriod(employee_id=1, amount=Decimal("1100.00"), valid_from=date(2024, 1, 1)))
    world.employees.salaries.append(SalaryPeriod(employee_id=1, amount=Decimal("3300.00"), valid_from=date(2025, 3, 1)))
    _full_march(world)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00", "13:00", "17:45"))

    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert s.hourly_rate == Decimal("15")
    assert s.payable_ordinary_min == 45
    assert s.money.payable_ordinary == Decimal("11.25")
    assert s.money.deduction == Decimal("0.00")


def test_money_preview_is_zero_without_reference_hours():
    world = build_world(make_employee(monthly_reference_hours=Decimal("0")))
    s = world.container.aggregator.summarize(employee_id=1, year_month=MARCH)
    assert s.hourly_rate == Decimal("0")
    assert s.money.deduction == Decimal("0.00")
