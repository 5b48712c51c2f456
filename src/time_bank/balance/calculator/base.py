from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Settlement:
    """Minutes to pay or deduct for a month, after applying a compensation policy."""

    payable_ordinary_min: int
    payable_premium_min: int
    deduct_min: int
    offset_ordinary_min: int = 0
    offset_premium_min: int = 0


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for the compensation policy)."""

    @abstractmethod
    def settle(self, *, ordinary_overtime_min: int, premium_overtime_min: int, deficit_min: int) -> Settlement:
        """``deficit_min`` is <= 0; overtime figures are >= 0."""
        raise NotImplementedError
