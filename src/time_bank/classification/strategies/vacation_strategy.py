from __future__ import annotations

from ...core.enums import DayCategory
from .base import CategoryDecision, ClassificationStrategy, DayFigures


class VacationStrategy(ClassificationStrategy):
    """Vacation days neither owe nor earn hours."""

    def decide(self, figures: DayFigures) -> CategoryDecision:
        return CategoryDecision(category=DayCategory.NORMAL, impact=0)
