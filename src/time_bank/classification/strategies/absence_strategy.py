from __future__ import annotations

from ...core.enums import DayCategory, Occurrence
from .base import CategoryDecision, ClassificationStrategy, DayFigures

_CATEGORY = {
    Occurrence.JUSTIFIED_ABSENCE: DayCategory.JUSTIFIED_ABSENCE,
    Occurrence.UNJUSTIFIED_ABSENCE: DayCategory.UNJUSTIFIED_ABSENCE,
}


class AbsenceStrategy(ClassificationStrategy):
    """Justified or unjustified absence. Never credits the bank."""

    def decide(self, figures: DayFigures) -> CategoryDecision:
        impact = figures.diff if figures.diff < 0 else -abs(figures.expected)
        return CategoryDecision(category=_CATEGORY[figures.occurrence], impact=impact)
