from datetime import date

import pytest

from time_bank.common.datetime_utils import YearMonth
from time_bank.core.enums import LedgerEntryKind, PeriodStatus
from time_bank.core.exceptions import (
    EmployeeNotFoundError,
    InvalidAdjustmentError,
    LockedPeriodError,
    NotFoundError,
    ValidationError,
)
from time_bank.ledger.model import NewLedgerEntry
from time_bank.ledger.service import LedgerService
from time_bank.periods.service import PeriodService

from tests.fakes import InMemoryEmployees, InMemoryLedger, InMemoryPeriods, TickingClock, make_employee

MARCH = YearMonth(2025, 3)


def _service():
    employees = InMemoryEmployees()
    employees.add(make_employee())
    periods_repo = InMemoryPeriods()
    periods = PeriodService(periods_repo, clock=TickingClock())
    ledger_repo = InMemoryLedger()
    return LedgerService(ledger_repo, employees, periods, clock=TickingClock()), ledger_repo, periods_repo


def test_append_stores_entry_with_id():
    svc, repo, _ = _service()
    entry = svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=-30, note="  late train  "))
    assert entry.entry_id == 1
    assert entry.note == "late train"
    assert repo.get(entry_id=1).minutes == -30


@pytest.mark.parametrize("minutes", [0, 1.5, True, "10"])
def test_append_rejects_zero_or_non_integer_minutes(minutes):
    svc, _, _ = _service()
    with pytest.raises(InvalidAdjustmentError) as exc:
        svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=minutes))
    assert exc.value.field == "minutes"


def test_append_rejects_long_note():
    svc, _, _ = _service()
    with pytest.raises(ValidationError):
        svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=10, note="x" * 256))


def test_carry_over_is_sum_of_earlier_months():
    svc, _, _ = _service()
    svc.append(NewLedgerEntry(employee_id=1, year_month=YearMonth(2025, 1), minutes=60))
    svc.append(NewLedgerEntry(employee_id=1, year_month=YearMonth(2025, 2), minutes=-20))
    svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=500))
    assert svc.carry_over_balance(1, MARCH) == 40


def test_list_entries_is_ordered_by_creation():
    svc, _, _ = _service()
    a = svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=5))
    b = svc.append(NewLedgerEntry(employee_id=1, year_month=YearMonth(2025, 1), minutes=7))
    assert [e.entry_id for e in svc.list_entries(1, MARCH)] == [a.entry_id, b.entry_id]


def test_month_totals_split_by_kind():
    svc, _, _ = _service()
    svc.append(NewLedgerEntry(employee_id=1, year_month=YearMonth(2025, 2), minutes=15))
    svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=-10))
    svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=-45, kind=LedgerEntryKind.CLOSURE_PAYOUT))

    totals = svc.month_totals(svc.list_entries(1, MARCH), MARCH)
    assert (totals.carry_over_min, totals.manual_min, totals.closure_min) == (15, -10, -45)
    assert len(totals.current_entries) == 2


def test_remove_only_manual_entries():
    svc, _, _ = _service()
    manual = svc.append(NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=10))
    closure = svc.append(
        NewLedgerEntry(employee_id=1, year_month=MARCH, minutes=-10, kind=LedgerEntryKind.CLOSURE_DEDUCTION)
    )

    svc.remove(manual.entry_id)
    with pytest.raises(NotFoundError):
        svc.remove(manual.entry_id)
    with pytest.raises(InvalidAdjustmentError):
        svc.remove(closure.entry_id)


def test_manual_adjustment_opens_period_and_derives_month():
    svc, _, periods = _service()
    entry = svc.add_manual_adjustment(employee_id=1, day=date(2025, 3, 14), minutes=25, actor="hr")
    assert entry.year_month == MARCH
    assert entry.kind is LedgerEntryKind.MANUAL_ADJUSTMENT
    assert periods.get(employee_id=1, year=2025, month=3).status is PeriodStatus.OPEN


def test_manual_adjustment_requires_known_employee():
    svc, _, _ = _service()
    with pytest.raises(EmployeeNotFoundError):
        svc.add_manual_adjustment(employee_id=99, day=date(2025, 3, 14), minutes=25)


def test_manual_adjustment_on_closed_period_is_locked():
    svc, repo, periods = _service()
    periods.force(1, MARCH, PeriodStatus.CLOSED)
    with pytest.raises(LockedPeriodError):
        svc.add_manual_adjustment(employee_id=1, day=date(2025, 3, 14), minutes=25)
    assert repo.entries == {}


def test_removing_adjustment_of_closed_period_is_locked():
    svc, repo, periods = _service()
    entry = svc.add_manual_adjustment(employee_id=1, day=date(2025, 3, 14), minutes=25)
    periods.force(1, MARCH, PeriodStatus.CLOSED)
    with pytest.raises(LockedPeriodError):
        svc.remove_manual_adjustment(entry.entry_id)
    assert entry.entry_id in repo.entries


class _FailingLedger(InMemoryLedger):
    def insert(self, **kwargs):
        raise RuntimeError("insert failed")


def test_failed_adjustment_leaves_month_not_started():
    employees = InMemoryEmployees()
    employees.add(make_employee())
    periods_repo = InMemoryPeriods()
    svc = LedgerService(_FailingLedger(), employees, PeriodService(periods_repo, clock=TickingClock()))

    with pytest.raises(RuntimeError):
        svc.add_manual_adjustment(employee_id=1, day=date(2025, 3, 14), minutes=25)
    assert periods_repo.get(employee_id=1, year=2025, month=3) is None
