from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import YearMonth
from ..core.enums import LedgerEntryKind
from .model import LedgerEntry


class LedgerRepository(Protocol):
    def insert(
        self,
        *,
        employee_id: int,
        year_month: YearMonth,
        minutes: int,
        kind: LedgerEntryKind,
        note: Optional[str],
        created_at: datetime,
    ) -> int:
        """Returns entry_id."""

        raise NotImplementedError

    def get(self, *, entry_id: int) -> Optional[LedgerEntry]:
        raise NotImplementedError

    def delete(self, *, entry_id: int) -> bool:
        raise NotImplementedError

    def list_up_to(self, *, employee_id: int, up_to: YearMonth) -> Sequence[LedgerEntry]:
        """Entries with year_month <= ``up_to``, oldest first."""

        raise NotImplementedError
