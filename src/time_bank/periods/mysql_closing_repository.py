from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import CompensationPolicy
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .closing_repository import ClosingRepository
from .model import PeriodClosing

_COLUMNS = (
    "employee_id, ref_year, ref_month, policy, zero_at_month_end, carry_over_min, ordinary_overtime_min, "
    "premium_overtime_min, deficit_min, adjustments_min, final_balance_min, payable_ordinary_min, "
    "payable_premium_min, deduct_min, amount_to_pay, amount_to_deduct, closed_at, closed_by, "
    "reopened_at, reopened_by"
)


def _to_model(r) -> PeriodClosing:
    return PeriodClosing(
        employee_id=int(r["employee_id"]),
        year=int(r["ref_year"]),
        month=int(r["ref_month"]),
        policy=CompensationPolicy(r["policy"]),
        zero_at_month_end=bool(r["zero_at_month_end"]),
        carry_over_min=int(r["carry_over_min"]),
        ordinary_overtime_min=int(r["ordinary_overtime_min"]),
        premium_overtime_min=int(r["premium_overtime_min"]),
        deficit_min=int(r["deficit_min"]),
        adjustments_min=int(r["adjustments_min"]),
        final_balance_min=int(r["final_balance_min"]),
        payable_ordinary_min=int(r["payable_ordinary_min"]),
        payable_premium_min=int(r["payable_premium_min"]),
        deduct_min=int(r["deduct_min"]),
        amount_to_pay=Decimal(str(r["amount_to_pay"])),
        amount_to_deduct=Decimal(str(r["amount_to_deduct"])),
        closed_at=r.get("closed_at"),
        closed_by=r.get("closed_by"),
        reopened_at=r.get("reopened_at"),
        reopened_by=r.get("reopened_by"),
    )


class MySQLClosingRepository(ClosingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, closing: PeriodClosing) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO timebank_period_closings({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NULL,NULL)
                ON DUPLICATE KEY UPDATE
                    policy=VALUES(policy), zero_at_month_end=VALUES(zero_at_month_end),
                    carry_over_min=VALUES(carry_over_min), ordinary_overtime_min=VALUES(ordinary_overtime_min),
                    premium_overtime_min=VALUES(premium_overtime_min), deficit_min=VALUES(deficit_min),
                    adjustments_min=VALUES(adjustments_min), final_balance_min=VALUES(final_balance_min),
                    payable_ordinary_min=VALUES(payable_ordinary_min),
                    payable_premium_min=VALUES(payable_premium_min), deduct_min=VALUES(deduct_min),
                    amount_to_pay=VALUES(amount_to_pay), amount_to_deduct=VALUES(amount_to_deduct),
                    closed_at=VALUES(closed_at), closed_by=VALUES(closed_by),
                    reopened_at=NULL, reopened_by=NULL
                """,
                (
                    closing.employee_id,
                    closing.year,
                    closing.month,
                    closing.policy.value,
                    1 if closing.zero_at_month_end else 0,
                    closing.carry_over_min,
                    closing.ordinary_overtime_min,
                    closing.premium_overtime_min,
                    closing.deficit_min,
                    closing.adjustments_min,
                    closing.final_balance_min,
                    closing.payable_ordinary_min,
                    closing.payable_premium_min,
                    closing.deduct_min,
                    closing.amount_to_pay,
                    closing.amount_to_deduct,
                    closing.closed_at,
                    closing.closed_by,
                ),
            )

    def get(self, *, employee_id: int, year: int, month: int) -> Optional[PeriodClosing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timebank_period_closings
                WHERE employee_id=%s AND ref_year=%s AND ref_month=%s
                """,
                (int(employee_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_for_employee(self, *, employee_id: int) -> Sequence[PeriodClosing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timebank_period_closings
                WHERE employee_id=%s
                ORDER BY ref_year DESC, ref_month DESC
                """,
                (int(employee_id),),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def mark_reopened(
        self, *, employee_id: int, year: int, month: int, reopened_at: datetime, reopened_by: Optional[str] = None
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timebank_period_closings
                SET reopened_at=%s, reopened_by=%s
                WHERE employee_id=%s AND ref_year=%s AND ref_month=%s
                """,
                (reopened_at, reopened_by, int(employee_id), int(year), int(month)),
            )
            return cur.rowcount > 0
