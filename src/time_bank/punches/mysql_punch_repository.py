from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import Occurrence
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, mysql_time_to_hhmm
from .model import DailyPunchRecord
from .repository import PunchRepository


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[DailyPunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date,
                       morning_in, morning_out, afternoon_in, afternoon_out, extra_in, extra_out,
                       occurrence, absence_reason_id, note, is_holiday
                FROM punch_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start, end),
            )
            return [
                DailyPunchRecord(
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    morning_in=mysql_time_to_hhmm(r.get("morning_in")),
                    morning_out=mysql_time_to_hhmm(r.get("morning_out")),
                    afternoon_in=mysql_time_to_hhmm(r.get("afternoon_in")),
                    afternoon_out=mysql_time_to_hhmm(r.get("afternoon_out")),
                    extra_in=mysql_time_to_hhmm(r.get("extra_in")),
                    extra_out=mysql_time_to_hhmm(r.get("extra_out")),
                    occurrence=Occurrence(r.get("occurrence") or Occurrence.NORMAL.value),
                    absence_reason_id=int(r["absence_reason_id"]) if r.get("absence_reason_id") is not None else None,
                    note=r.get("note"),
                    is_holiday=bool(r.get("is_holiday")),
                )
                for r in fetchall(cur)
            ]

    def replace_range(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        records: Sequence[DailyPunchRecord],
    ) -> int:
        # One cursor == one transaction, so the month is replaced as a whole or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM punch_records WHERE employee_id=%s AND work_date BETWEEN %s AND %s",
                (int(employee_id), start, end),
            )
            if records:
                cur.executemany(
                    """
                    INSERT INTO punch_records(
                        employee_id, work_date,
                        morning_in, morning_out, afternoon_in, afternoon_out, extra_in, extra_out,
                        occurrence, absence_reason_id, note, is_holiday
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            int(employee_id),
                            r.work_date,
                            r.morning_in,
                            r.morning_out,
                            r.afternoon_in,
                            r.afternoon_out,
                            r.extra_in,
                            r.extra_out,
                            r.occurrence.value,
                            r.absence_reason_id,
                            r.note,
                            1 if r.is_holiday else 0,
                        )
                        for r in records
                    ],
                )
            return len(records)
