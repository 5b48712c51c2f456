import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from time_bank.common.datetime_utils import YearMonth
from time_bank.core.enums import LedgerEntryKind, PeriodStatus
from time_bank.core.exceptions import EmployeeNotFoundError, InvalidTransitionError
from time_bank.reporting.export import export_summary_csv

from tests.fakes import build_world, make_employee, punch

MARCH = YearMonth(2025, 3)


def _on_schedule(world, employee_id):
    for day in MARCH.days():
        if day.weekday() < 5:
            world.punches.add(punch(employee_id, day, "08:00", "12:00", "13:00", "17:00"))


def test_close_with_settlement_posts_payout_and_zeroes_balance():
    world = build_world()
    _on_schedule(world, 1)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00", "13:00", "18:00"))
    reporting = world.container.reporting_service
    world.periods.force(1, MARCH, PeriodStatus.OPEN)

    result = reporting.close_period(employee_id=1, year=2025, month=3, settle=True, actor="boss")

    assert result.period.status is PeriodStatus.CLOSED
    assert result.settlement_entry.kind is LedgerEntryKind.CLOSURE_PAYOUT
    assert result.settlement_entry.minutes == -60
    march = reporting.get_monthly_summary(employee_id=1, year=2025, month=3)
    assert march.closure_entries_min == -60
    assert march.technical_balance_min == 0


def test_close_with_settlement_of_negative_balance_posts_deduction():
    world = build_world()
    _on_schedule(world, 1)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00"))
    world.periods.force(1, MARCH, PeriodStatus.OPEN)

    result = world.container.reporting_service.close_period(employee_id=1, year=2025, month=3, settle=True)
    assert result.settlement_entry.kind is LedgerEntryKind.CLOSURE_DEDUCTION
    assert result.settlement_entry.minutes == 240


def test_close_with_settlement_of_zero_balance_posts_nothing():
    world = build_world()
    _on_schedule(world, 1)
    world.periods.force(1, MARCH, PeriodStatus.OPEN)

    result = world.container.reporting_service.close_period(employee_id=1, year=2025, month=3, settle=True)
    assert result.settlement_entry is None
    assert world.ledger.entries == {}


def test_close_without_settlement_only_transitions():
    world = build_world()
    world.periods.force(1, MARCH, PeriodStatus.OPEN)
    result = world.container.reporting_service.close_period(employee_id=1, year=2025, month=3)
    assert result.period.status is PeriodStatus.CLOSED
    assert world.ledger.entries == {}


def test_close_of_not_started_month_fails_without_posting():
    world = build_world()
    with pytest.raises(InvalidTransitionError):
        world.container.reporting_service.close_period(employee_id=1, year=2025, month=3, settle=True)
    assert world.ledger.entries == {}


def test_reopen_after_close():
    world = build_world()
    reporting = world.container.reporting_service
    world.periods.force(1, MARCH, PeriodStatus.OPEN)
    reporting.close_period(employee_id=1, year=2025, month=3)
    assert reporting.reopen_period(employee_id=1, year=2025, month=3).status is PeriodStatus.OPEN
    assert [p.month for p in reporting.list_available_periods(employee_id=1, year=2025)] == [3]


def test_fleet_rollup_sorted_by_name_and_filtered():
    world = build_world(
        make_employee(1, "Zoe"),
        make_employee(2, "Ana"),
        make_employee(3, "Bruno", dept_id=2, dept_name="Finance"),
        make_employee(4, "Carla", is_active=False),
    )
    for emp in (1, 2, 3):
        _on_schedule(world, emp)
    world.punches.add(punch(2, date(2025, 3, 8), "09:00", "10:00"))

    rows = world.container.reporting_service.fleet_rollup(MARCH)
    assert [r.full_name for r in rows] == ["Ana", "Bruno", "Zoe"]
    ana = rows[0]
    assert ana.credits_min == 60
    assert ana.premium_paid_min == 60
    assert ana.balance_min == 60

    ops = world.container.reporting_service.fleet_rollup(MARCH, department_id=1)
    assert [r.employee_id for r in ops] == [2, 1]


def test_export_summary_csv_has_days_and_totals():
    world = build_world()
    _on_schedule(world, 1)
    summary = world.container.reporting_service.get_monthly_summary(employee_id=1, year=2025, month=3)

    text = export_summary_csv(summary).decode("utf-8-sig")
    rows = list(csv.DictReader(io.StringIO(text)))
    days = [r for r in rows if r["work_date"] != "TOTAL"]
    totals = {r["category"]: int(r["impact_minutes"]) for r in rows if r["work_date"] == "TOTAL"}

    assert len(days) == 31
    assert days[0]["work_date"] == "2025-03-01"
    assert days[0]["weekday"] == "SAT"
    assert totals["technical_balance"] == 0


def test_close_stores_closing_snapshot():
    world = build_world()
    _on_schedule(world, 1)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00", "13:00", "18:00"))
    world.periods.force(1, MARCH, PeriodStatus.OPEN)
    reporting = world.container.reporting_service

    result = reporting.close_period(employee_id=1, year=2025, month=3, settle=True, actor="boss")

    closing = reporting.get_closing(employee_id=1, year=2025, month=3)
    assert closing == result.closing
    assert closing.zero_at_month_end is True
    assert closing.ordinary_overtime_min == 60
    assert closing.deficit_min == 0
    assert closing.final_balance_min == 0
    assert closing.payable_ordinary_min == 60
    assert closing.amount_to_pay == Decimal("15.00")
    assert closing.amount_to_deduct == Decimal("0.00")
    assert closing.closed_by == "boss"
    assert closing.closed_at == result.period.updated_at
    assert closing.reopened_at is None


def test_close_without_settlement_keeps_balance_in_snapshot():
    world = build_world()
    _on_schedule(world, 1)
    world.punches.add(punch(1, date(2025, 3, 3), "08:00", "12:00"))
    world.periods.force(1, MARCH, PeriodStatus.OPEN)

    closing = world.container.reporting_service.close_period(employee_id=1, year=2025, month=3).closing
    assert closing.zero_at_month_end is False
    assert closing.deficit_min == -240
    assert closing.final_balance_min == -240


def test_failed_close_stores_no_snapshot():
    world = build_world()
    with pytest.raises(InvalidTransitionError):
        world.container.reporting_service.close_period(employee_id=1, year=2025, month=3)
    assert world.closings.rows == {}


def test_reopen_stamps_snapshot_and_reclose_replaces_it():
    world = build_world()
    reporting = world.container.reporting_service
    world.periods.force(1, MARCH, PeriodStatus.OPEN)
    reporting.close_period(employee_id=1, year=2025, month=3, actor="boss")

    reporting.reopen_period(employee_id=1, year=2025, month=3, actor="master")
    reopened = reporting.get_closing(employee_id=1, year=2025, month=3)
    assert reopened.reopened_by == "master"
    assert reopened.reopened_at is not None

    reporting.close_period(employee_id=1, year=2025, month=3, actor="boss2")
    again = reporting.get_closing(employee_id=1, year=2025, month=3)
    assert again.closed_by == "boss2"
    assert again.reopened_at is None


def test_list_closings_newest_first():
    world = build_world()
    reporting = world.container.reporting_service
    for ym in (YearMonth(2025, 1), YearMonth(2025, 2), YearMonth(2024, 12)):
        world.periods.force(1, ym, PeriodStatus.OPEN)
        reporting.close_period(employee_id=1, year=ym.year, month=ym.month)

    assert [c.year_month.token for c in reporting.list_closings(employee_id=1)] == ["2025-02", "2025-01", "2024-12"]
    with pytest.raises(EmployeeNotFoundError):
        reporting.list_closings(employee_id=42)


def test_summary_lists_entries_of_the_month_in_order():
    world = build_world()
    reporting = world.container.reporting_service
    before = reporting.add_manual_adjustment(employee_id=1, day=date(2025, 2, 10), minutes=30)
    first = reporting.add_manual_adjustment(employee_id=1, day=date(2025, 3, 10), minutes=-45, note="late")
    second = reporting.add_manual_adjustment(employee_id=1, day=date(2025, 3, 11), minutes=15)

    summary = reporting.get_monthly_summary(employee_id=1, year=2025, month=3)

    assert [e.entry_id for e in summary.entries] == [first.entry_id, second.entry_id]
    assert before.entry_id not in [e.entry_id for e in summary.entries]
    assert summary.carry_over_min == 30
