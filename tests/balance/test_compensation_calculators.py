import pytest

from time_bank.balance.calculator import AlwaysDeductCalculator, OffsetAgainstOvertimeCalculator, calculator_for
from time_bank.core.enums import CompensationPolicy


def test_offset_nets_deficit_against_ordinary_overtime():
    s = OffsetAgainstOvertimeCalculator().settle(ordinary_overtime_min=30, premium_overtime_min=0, deficit_min=-50)
    assert s.payable_ordinary_min == 0
    assert s.deduct_min == 20
    assert s.offset_ordinary_min == 30


def test_offset_uses_premium_after_ordinary():
    s = OffsetAgainstOvertimeCalculator().settle(ordinary_overtime_min=30, premium_overtime_min=60, deficit_min=-50)
    assert (s.payable_ordinary_min, s.payable_premium_min, s.deduct_min) == (0, 40, 0)
    assert (s.offset_ordinary_min, s.offset_premium_min) == (30, 20)


def test_offset_without_deficit_pays_everything():
    s = OffsetAgainstOvertimeCalculator().settle(ordinary_overtime_min=45, premium_overtime_min=15, deficit_min=0)
    assert (s.payable_ordinary_min, s.payable_premium_min, s.deduct_min) == (45, 15, 0)


def test_always_deduct_keeps_figures_apart():
    s = AlwaysDeductCalculator().settle(ordinary_overtime_min=30, premium_overtime_min=10, deficit_min=-50)
    assert (s.payable_ordinary_min, s.payable_premium_min, s.deduct_min) == (30, 10, 50)
    assert (s.offset_ordinary_min, s.offset_premium_min) == (0, 0)


@pytest.mark.parametrize(
    "policy, cls",
    [
        (CompensationPolicy.OFFSET_AGAINST_OVERTIME, OffsetAgainstOvertimeCalculator),
        (CompensationPolicy.ALWAYS_DEDUCT, AlwaysDeductCalculator),
    ],
)
def test_calculator_for_policy(policy, cls):
    assert isinstance(calculator_for(policy), cls)
