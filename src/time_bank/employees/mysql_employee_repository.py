from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from ..schedules.model import WorkSchedule
from .model import Employee
from .repository import EmployeeRepository

_SELECT_EMPLOYEE = """
    SELECT
        e.employee_id, e.full_name, e.dept_id, d.dept_name,
        e.base_salary, e.monthly_reference_hours, e.is_active,
        ws.schedule_id, ws.schedule_name,
        ws.morning_in, ws.morning_out, ws.afternoon_in, ws.afternoon_out,
        ws.break_start, ws.break_end, ws.tolerance_minutes
    FROM employees e
    LEFT JOIN departments d ON d.dept_id = e.dept_id
    LEFT JOIN work_schedules ws ON ws.schedule_id = e.schedule_id
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    schedule = None
    if r.get("schedule_id") is not None:
        schedule = WorkSchedule(
            schedule_id=int(r["schedule_id"]),
            name=r.get("schedule_name") or "",
            morning_in=mysql_time_to_hhmm(r.get("morning_in")),
            morning_out=mysql_time_to_hhmm(r.get("morning_out")),
            afternoon_in=mysql_time_to_hhmm(r.get("afternoon_in")),
            afternoon_out=mysql_time_to_hhmm(r.get("afternoon_out")),
            break_start=mysql_time_to_hhmm(r.get("break_start")),
            break_end=mysql_time_to_hhmm(r.get("break_end")),
            tolerance_minutes=int(r.get("tolerance_minutes") or 0),
        )

    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        dept_id=int(r["dept_id"]) if r.get("dept_id") is not None else None,
        dept_name=r.get("dept_name"),
        schedule=schedule,
        base_salary=Decimal(str(r.get("base_salary") or 0)),
        monthly_reference_hours=Decimal(str(r.get("monthly_reference_hours") or 0)),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_EMPLOYEE + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_active(self, *, dept_id: Optional[int] = None) -> Sequence[Employee]:
        clauses = ["e.is_active=1"]
        params: list[object] = []
        if dept_id is not None:
            clauses.append("e.dept_id=%s")
            params.append(int(dept_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_EMPLOYEE + f" WHERE {' AND '.join(clauses)} ORDER BY e.full_name ASC",
                tuple(params),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_salary_for_range(self, *, employee_id: int, start: date, end: date) -> Optional[Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT amount
                FROM employee_salaries
                WHERE employee_id=%s
                  AND valid_from <= %s
                  AND (valid_to IS NULL OR valid_to >= %s)
                ORDER BY valid_from DESC
                LIMIT 1
                """,
                (int(employee_id), end, start),
            )
            r = fetchone(cur)
            if not r or r.get("amount") is None:
                return None
            return Decimal(str(r["amount"]))
