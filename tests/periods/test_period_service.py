import pytest

from time_bank.common.datetime_utils import YearMonth
from time_bank.core.enums import PeriodStatus
from time_bank.core.exceptions import InvalidTransitionError, LockedPeriodError
from time_bank.periods.service import PeriodService

from tests.fakes import InMemoryPeriods, TickingClock

MARCH = YearMonth(2025, 3)


def _service():
    repo = InMemoryPeriods()
    return PeriodService(repo, clock=TickingClock()), repo


def test_untouched_month_is_not_started():
    svc, _ = _service()
    assert svc.status_of(1, MARCH) is PeriodStatus.NOT_STARTED


def test_first_write_opens_the_month():
    svc, repo = _service()
    assert svc.ensure_writable(1, MARCH, actor="u1") is PeriodStatus.OPEN
    record = repo.get(employee_id=1, year=2025, month=3)
    assert record.status is PeriodStatus.OPEN
    assert record.updated_by == "u1"
    # Second write is a no-op.
    assert svc.ensure_writable(1, MARCH) is PeriodStatus.OPEN


def test_close_close_reopen_sequence():
    svc, _ = _service()
    svc.ensure_writable(1, MARCH)

    closed = svc.close(1, MARCH, actor="boss")
    assert closed.status is PeriodStatus.CLOSED

    with pytest.raises(InvalidTransitionError):
        svc.close(1, MARCH)

    reopened = svc.reopen(1, MARCH)
    assert reopened.status is PeriodStatus.OPEN
    assert svc.status_of(1, MARCH) is PeriodStatus.OPEN


def test_close_requires_open_period():
    svc, _ = _service()
    with pytest.raises(InvalidTransitionError):
        svc.close(1, MARCH)


def test_reopen_requires_closed_period():
    svc, _ = _service()
    svc.ensure_writable(1, MARCH)
    with pytest.raises(InvalidTransitionError):
        svc.reopen(1, MARCH)


def test_closed_month_rejects_writes():
    svc, _ = _service()
    svc.ensure_writable(1, MARCH)
    svc.close(1, MARCH)
    with pytest.raises(LockedPeriodError):
        svc.ensure_writable(1, MARCH)


def test_list_available_skips_not_started_and_orders_by_month():
    svc, _ = _service()
    svc.ensure_writable(1, YearMonth(2025, 5))
    svc.ensure_writable(1, YearMonth(2025, 2))
    svc.close(1, YearMonth(2025, 2))
    svc.ensure_writable(1, YearMonth(2024, 12))

    months = [p.month for p in svc.list_available(1, 2025)]
    assert months == [2, 5]

    closed = svc.list_available(1, 2025, statuses=[PeriodStatus.CLOSED, PeriodStatus.NOT_STARTED])
    assert [p.month for p in closed] == [2]
