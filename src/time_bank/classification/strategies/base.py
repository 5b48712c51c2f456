from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import DayCategory, DayType, Occurrence


@dataclass(frozen=True)
class DayFigures:
    """Minute figures a strategy decides on. ``diff`` is already tolerance-snapped."""

    day_type: DayType
    occurrence: Occurrence
    expected: int
    worked: int
    diff: int


@dataclass(frozen=True)
class CategoryDecision:
    category: DayCategory
    impact: int


class ClassificationStrategy(ABC):
    """Strategy Pattern: encapsulate how a day turns into a category and ledger impact."""

    @abstractmethod
    def decide(self, figures: DayFigures) -> CategoryDecision:
        raise NotImplementedError
