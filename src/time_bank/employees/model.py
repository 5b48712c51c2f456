from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..schedules.model import WorkSchedule


@dataclass(frozen=True)
class Employee:
    """Employee profile as seen by the time bank."""

    employee_id: int
    full_name: str
    dept_id: Optional[int]
    dept_name: Optional[str]
    schedule: Optional[WorkSchedule]
    base_salary: Decimal = Decimal("0")
    monthly_reference_hours: Decimal = Decimal("0")
    is_active: bool = True


@dataclass(frozen=True)
class SalaryPeriod:
    employee_id: int
    amount: Decimal
    valid_from: date
    valid_to: Optional[date] = None
