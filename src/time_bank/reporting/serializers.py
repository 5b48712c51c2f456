from __future__ import annotations

from decimal import Decimal

from ..balance.model import MonthlySummary
from ..core.constants import MONEY_QUANTUM
from ..holidays.model import AbsenceReason, Holiday
from ..ledger.model import LedgerEntry
from ..periods.model import PeriodClosing, PeriodRecord
from ..punches.model import DailyPunchRecord
from .export import summary_rows
from .service import RollupRow


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(Decimal(MONEY_QUANTUM)))


def summary_to_dict(s: MonthlySummary) -> dict:
    return {
        "employee_id": s.employee_id,
        "employee_name": s.employee_name,
        "dept_name": s.dept_name,
        "year_month": s.year_month.token,
        "policy": s.policy.value,
        "zero_at_month_end": s.zero_at_month_end,
        "days": summary_rows(s),
        "totals": {
            "ordinary_overtime_min": s.ordinary_overtime_min,
            "premium_overtime_min": s.premium_overtime_min,
            "deficit_min": s.deficit_min,
            "carry_over_min": s.carry_over_min,
            "manual_entries_min": s.manual_entries_min,
            "closure_entries_min": s.closure_entries_min,
            "technical_balance_min": s.technical_balance_min,
            "final_balance_min": s.final_balance_min,
            "closing_adjustment_min": s.closing_adjustment_min,
        },
        "settlement": {
            "offset_ordinary_min": s.offset_ordinary_min,
            "offset_premium_min": s.offset_premium_min,
            "payable_ordinary_min": s.payable_ordinary_min,
            "payable_premium_min": s.payable_premium_min,
            "deduct_min": s.deduct_min,
        },
        "money": {
            "hourly_rate": _money(s.hourly_rate),
            "payable_ordinary": _money(s.money.payable_ordinary),
            "payable_premium": _money(s.money.payable_premium),
            "deduction": _money(s.money.deduction),
        },
        "entries": [ledger_entry_to_dict(e) for e in s.entries],
    }


def rollup_row_to_dict(r: RollupRow) -> dict:
    return {
        "employee_id": r.employee_id,
        "full_name": r.full_name,
        "dept_name": r.dept_name,
        "carry_over_min": r.carry_over_min,
        "credits_min": r.credits_min,
        "debits_min": r.debits_min,
        "manual_min": r.manual_min,
        "closure_min": r.closure_min,
        "premium_paid_min": r.premium_paid_min,
        "balance_min": r.balance_min,
    }


def ledger_entry_to_dict(e: LedgerEntry) -> dict:
    return {
        "entry_id": e.entry_id,
        "employee_id": e.employee_id,
        "year_month": e.year_month.token,
        "minutes": e.minutes,
        "kind": e.kind.value,
        "note": e.note,
        "created_at": e.created_at.isoformat(timespec="seconds"),
    }


def period_to_dict(p: PeriodRecord) -> dict:
    return {
        "employee_id": p.employee_id,
        "year_month": p.year_month.token,
        "status": p.status.value,
        "updated_at": p.updated_at.isoformat(timespec="seconds") if p.updated_at else None,
        "updated_by": p.updated_by,
    }


def punch_to_dict(r: DailyPunchRecord) -> dict:
    return {
        "work_date": r.work_date.strftime("%Y-%m-%d"),
        "morning_in": r.morning_in,
        "morning_out": r.morning_out,
        "afternoon_in": r.afternoon_in,
        "afternoon_out": r.afternoon_out,
        "extra_in": r.extra_in,
        "extra_out": r.extra_out,
        "occurrence": r.occurrence.value,
        "absence_reason_id": r.absence_reason_id,
        "note": r.note,
        "is_holiday": r.is_holiday,
    }


def holiday_to_dict(h: Holiday) -> dict:
    return {
        "holiday_id": h.holiday_id,
        "day": h.day,
        "month": h.month,
        "description": h.description,
        "is_active": h.is_active,
    }


def absence_reason_to_dict(r: AbsenceReason) -> dict:
    return {"reason_id": r.reason_id, "description": r.description, "display_order": r.display_order}


def closing_to_dict(c: PeriodClosing) -> dict:
    return {
        "employee_id": c.employee_id,
        "year_month": c.year_month.token,
        "policy": c.policy.value,
        "zero_at_month_end": c.zero_at_month_end,
        "carry_over_min": c.carry_over_min,
        "ordinary_overtime_min": c.ordinary_overtime_min,
        "premium_overtime_min": c.premium_overtime_min,
        "deficit_min": c.deficit_min,
        "adjustments_min": c.adjustments_min,
        "final_balance_min": c.final_balance_min,
        "payable_ordinary_min": c.payable_ordinary_min,
        "payable_premium_min": c.payable_premium_min,
        "deduct_min": c.deduct_min,
        "amount_to_pay": _money(c.amount_to_pay),
        "amount_to_deduct": _money(c.amount_to_deduct),
        "closed_at": c.closed_at.isoformat(timespec="seconds") if c.closed_at else None,
        "closed_by": c.closed_by,
        "reopened_at": c.reopened_at.isoformat(timespec="seconds") if c.reopened_at else None,
        "reopened_by": c.reopened_by,
    }
