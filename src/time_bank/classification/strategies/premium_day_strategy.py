from __future__ import annotations

from ...core.enums import DayCategory
from .base import CategoryDecision, ClassificationStrategy, DayFigures


class PremiumDayStrategy(ClassificationStrategy):
    """Saturday, Sunday or holiday: nothing is owed, every worked minute counts in full."""

    def decide(self, figures: DayFigures) -> CategoryDecision:
        category = DayCategory.PREMIUM_OVERTIME if figures.worked > 0 else DayCategory.NORMAL
        return CategoryDecision(category=category, impact=figures.worked)
