from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import PeriodStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PeriodRecord
from .repository import PeriodRepository


def _to_model(r) -> PeriodRecord:
    return PeriodRecord(
        employee_id=int(r["employee_id"]),
        year=int(r["ref_year"]),
        month=int(r["ref_month"]),
        status=PeriodStatus(r["status"]),
        updated_at=r.get("updated_at"),
        updated_by=r.get("updated_by"),
    )


class MySQLPeriodRepository(PeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, employee_id: int, year: int, month: int) -> Optional[PeriodRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, ref_year, ref_month, status, updated_at, updated_by
                FROM timebank_periods
                WHERE employee_id=%s AND ref_year=%s AND ref_month=%s
                """,
                (int(employee_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timebank_periods(employee_id, ref_year, ref_month, status, updated_at, updated_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), updated_at=VALUES(updated_at), updated_by=VALUES(updated_by)
                """,
                (int(employee_id), int(year), int(month), status.value, updated_at, updated_by),
            )

    def list_for_year(
        self,
        *,
        employee_id: int,
        year: int,
        statuses: Iterable[PeriodStatus],
    ) -> Sequence[PeriodRecord]:
        values = [s.value for s in statuses]
        if not values:
            return []
        placeholders = ",".join(["%s"] * len(values))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, ref_year, ref_month, status, updated_at, updated_by
                FROM timebank_periods
                WHERE employee_id=%s AND ref_year=%s AND status IN ({placeholders})
                ORDER BY ref_month ASC
                """,
                (int(employee_id), int(year), *values),
            )
            return [_to_model(r) for r in fetchall(cur)]
