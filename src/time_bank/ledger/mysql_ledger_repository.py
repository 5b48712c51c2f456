from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import YearMonth
from ..core.enums import LedgerEntryKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LedgerEntry
from .repository import LedgerRepository

_COLUMNS = "entry_id, employee_id, competence, minutes, kind, note, created_at"


def _to_model(r) -> LedgerEntry:
    return LedgerEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        year_month=YearMonth.parse(r["competence"]),
        minutes=int(r["minutes"]),
        kind=LedgerEntryKind(r["kind"]),
        created_at=r["created_at"],
        note=r.get("note"),
    )


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timebank_ledger_entries(employee_id, competence, minutes, kind, note, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), year_month.token, int(minutes), kind.value, note, created_at),
            )
            return int(cur.lastrowid)

    def get(self, *, entry_id: int) -> Optional[LedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timebank_ledger_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def delete(self, *, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM timebank_ledger_entries WHERE entry_id=%s AND kind=%s",
                (int(entry_id), LedgerEntryKind.MANUAL_ADJUSTMENT.value),
            )
            return cur.rowcount > 0

    def list_up_to(self, *, employee_id: int, up_to: YearMonth) -> Sequence[LedgerEntry]:
        # CHAR(7) 'YYYY-MM' compares in calendar order.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timebank_ledger_entries
                WHERE employee_id=%s AND competence <= %s
                ORDER BY created_at ASC, entry_id ASC
                """,
                (int(employee_id), up_to.token),
            )
            return [_to_model(r) for r in fetchall(cur)]
