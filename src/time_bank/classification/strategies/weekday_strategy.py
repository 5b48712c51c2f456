from __future__ import annotations

from ...core.enums import DayCategory
from .base import CategoryDecision, ClassificationStrategy, DayFigures


class WeekdayStrategy(ClassificationStrategy):
    """Ordinary weekday: overtime, deficit or balanced."""

    def decide(self, figures: DayFigures) -> CategoryDecision:
        if figures.diff > 0:
            return CategoryDecision(category=DayCategory.ORDINARY_OVERTIME, impact=figures.diff)
        if figures.diff < 0:
            return CategoryDecision(category=DayCategory.DEFICIT, impact=figures.diff)
        return CategoryDecision(category=DayCategory.NORMAL, impact=0)
