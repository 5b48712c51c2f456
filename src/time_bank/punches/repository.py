from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import DailyPunchRecord


class PunchRepository(Protocol):
    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[DailyPunchRecord]:
        raise NotImplementedError

    def replace_range(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        records: Sequence[DailyPunchRecord],
    ) -> int:
        """Delete the employee's records in [start, end] and insert ``records``.

        Must run as a single transaction. Returns the number of rows inserted.
        """

        raise NotImplementedError
