from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, *, dept_id: Optional[int] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def get_salary_for_range(self, *, employee_id: int, start: date, end: date) -> Optional[Decimal]:
        """Most recent salary whose validity overlaps [start, end], if any."""

        raise NotImplementedError
