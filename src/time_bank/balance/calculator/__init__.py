from __future__ import annotations

from ...core.enums import CompensationPolicy
from .base import CompensationCalculator, Settlement
from .deduct_calculator import AlwaysDeductCalculator
from .offset_calculator import OffsetAgainstOvertimeCalculator


def calculator_for(policy: CompensationPolicy) -> CompensationCalculator:
    if policy is CompensationPolicy.OFFSET_AGAINST_OVERTIME:
        return OffsetAgainstOvertimeCalculator()
    if policy is CompensationPolicy.ALWAYS_DEDUCT:
        return AlwaysDeductCalculator()
    raise ValueError(f"Unhandled compensation policy {policy!r}")


__all__ = [
    "AlwaysDeductCalculator",
    "CompensationCalculator",
    "OffsetAgainstOvertimeCalculator",
    "Settlement",
    "calculator_for",
]
