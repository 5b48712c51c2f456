from __future__ import annotations

from .base import CompensationCalculator, Settlement


class OffsetAgainstOvertimeCalculator(CompensationCalculator):
    """Net the deficit against ordinary overtime first, then premium overtime.

    Whatever deficit is left is deducted from pay.
    """

    def settle(self, *, ordinary_overtime_min: int, premium_overtime_min: int, deficit_min: int) -> Settlement:
        ordinary = max(ordinary_overtime_min, 0)
        premium = max(premium_overtime_min, 0)
        remaining = abs(min(deficit_min, 0))

        offset_ordinary = min(ordinary, remaining)
        remaining -= offset_ordinary

        offset_premium = min(premium, remaining)
        remaining -= offset_premium

        return Settlement(
            payable_ordinary_min=ordinary - offset_ordinary,
            payable_premium_min=premium - offset_premium,
            deduct_min=remaining,
            offset_ordinary_min=offset_ordinary,
            offset_premium_min=offset_premium,
        )
