from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PeriodClosing


class ClosingRepository(Protocol):
    def save(self, closing: PeriodClosing) -> None:
        """Insert or replace the snapshot of (employee, year, month)."""

        raise NotImplementedError

    def get(self, *, employee_id: int, year: int, month: int) -> Optional[PeriodClosing]:
        raise NotImplementedError

    def list_for_employee(self, *, employee_id: int) -> Sequence[PeriodClosing]:
        """Newest month first."""

        raise NotImplementedError

    def mark_reopened(
        self, *, employee_id: int, year: int, month: int, reopened_at: datetime, reopened_by: Optional[str] = None
    ) -> bool:
        raise NotImplementedError
