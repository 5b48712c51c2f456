from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import PeriodStatus
from .model import PeriodRecord


class PeriodRepository(Protocol):
    def get(self, *, employee_id: int, year: int, month: int) -> Optional[PeriodRecord]:
        raise NotImplementedError

    def save_status(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        status: PeriodStatus,
        updated_at: datetime,
        updated_by: Optional[str] = None,
    ) -> None:
        """Insert or update the period row."""

        raise NotImplementedError

    def list_for_year(
        self,
        *,
        employee_id: int,
        year: int,
        statuses: Iterable[PeriodStatus],
    ) -> Sequence[PeriodRecord]:
        """Rows whose status is in ``statuses``, ordered by month."""

        raise NotImplementedError
