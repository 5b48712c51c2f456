from __future__ import annotations

from .base import CompensationCalculator, Settlement


class AlwaysDeductCalculator(CompensationCalculator):
    """Overtime is paid and deficit deducted independently; no netting."""

    def settle(self, *, ordinary_overtime_min: int, premium_overtime_min: int, deficit_min: int) -> Settlement:
        return Settlement(
            payable_ordinary_min=max(ordinary_overtime_min, 0),
            payable_premium_min=max(premium_overtime_min, 0),
            deduct_min=abs(min(deficit_min, 0)),
        )
