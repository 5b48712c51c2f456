from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceReason, Holiday
from .repository import AbsenceReasonRepository, HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, only_active: bool = False) -> Sequence[Holiday]:
        where = "WHERE is_active=1" if only_active else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, holiday_day, holiday_month, description, is_active
                FROM holidays
                {where}
                ORDER BY holiday_month, holiday_day
                """
            )
            return [
                Holiday(
                    holiday_id=int(r["holiday_id"]),
                    day=int(r["holiday_day"]),
                    month=int(r["holiday_month"]),
                    description=r.get("description") or "",
                    is_active=bool(r.get("is_active")),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, day: int, month: int, description: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(holiday_day, holiday_month, description, is_active)
                VALUES(%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE description=VALUES(description), is_active=1
                """,
                (int(day), int(month), description),
            )

            # If it was an update, lastrowid can be 0; fetch holiday_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT holiday_id FROM holidays WHERE holiday_day=%s AND holiday_month=%s",
                (int(day), int(month)),
            )
            r = fetchone(cur)
            return int(r["holiday_id"]) if r else 0

    def deactivate(self, *, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE holidays SET is_active=0 WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0


class MySQLAbsenceReasonRepository(AbsenceReasonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r) -> AbsenceReason:
        return AbsenceReason(
            reason_id=int(r["reason_id"]),
            description=r["description"],
            is_active=bool(r.get("is_active")),
            display_order=int(r.get("display_order") or 0),
        )

    def list_active(self) -> Sequence[AbsenceReason]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT reason_id, description, is_active, display_order
                FROM absence_reasons
                WHERE is_active=1
                ORDER BY display_order, reason_id
                """
            )
            return [self._to_model(r) for r in fetchall(cur)]

    def get_by_id(self, reason_id: int) -> Optional[AbsenceReason]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT reason_id, description, is_active, display_order FROM absence_reasons WHERE reason_id=%s",
                (int(reason_id),),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None
