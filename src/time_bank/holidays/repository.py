from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AbsenceReason, Holiday


class HolidayRepository(Protocol):
    def list_all(self, *, only_active: bool = False) -> Sequence[Holiday]:
        raise NotImplementedError

    def upsert(self, *, day: int, month: int, description: str) -> int:
        """Create or reactivate the holiday for (day, month).

        Returns holiday_id.
        """

        raise NotImplementedError

    def deactivate(self, *, holiday_id: int) -> bool:
        raise NotImplementedError


class AbsenceReasonRepository(Protocol):
    def list_active(self) -> Sequence[AbsenceReason]:
        raise NotImplementedError

    def get_by_id(self, reason_id: int) -> Optional[AbsenceReason]:
        raise NotImplementedError
