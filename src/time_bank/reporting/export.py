from __future__ import annotations

import csv
import io

from ..balance.model import MonthlySummary
from ..common.datetime_utils import minutes_to_hhmm

_FIELDNAMES = [
    "work_date",
    "weekday",
    "day_type",
    "occurrence",
    "expected",
    "worked",
    "difference",
    "category",
    "impact_minutes",
]


def summary_rows(summary: MonthlySummary) -> list[dict]:
    return [
        {
            "work_date": d.work_date.strftime("%Y-%m-%d"),
            "weekday": d.weekday,
            "day_type": d.day_type.value,
            "occurrence": d.occurrence.value,
            "expected": minutes_to_hhmm(d.expected_minutes),
            "worked": minutes_to_hhmm(d.worked_minutes),
            "difference": minutes_to_hhmm(d.diff_minutes),
            "category": d.category.value,
            "impact_minutes": d.impact_minutes,
        }
        for d in summary.days
    ]


def _totals(summary: MonthlySummary) -> list[tuple[str, int]]:
    return [
        ("carry_over", summary.carry_over_min),
        ("ordinary_overtime", summary.ordinary_overtime_min),
        ("premium_overtime", summary.premium_overtime_min),
        ("deficit", summary.deficit_min),
        ("manual_entries", summary.manual_entries_min),
        ("closure_entries", summary.closure_entries_min),
        ("technical_balance", summary.technical_balance_min),
        ("deduct", summary.deduct_min),
        ("final_balance", summary.final_balance_min),
    ]


def export_summary_csv(summary: MonthlySummary) -> bytes:
    """Per-day rows followed by one row per month total.

    Encoded as UTF-8 with BOM so spreadsheets pick the right charset.
    """
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=_FIELDNAMES)
    writer.writeheader()
    for row in summary_rows(summary):
        writer.writerow(row)

    for label, minutes in _totals(summary):
        writer.writerow({"work_date": "TOTAL", "category": label, "difference": minutes_to_hhmm(minutes), "impact_minutes": minutes})

    return out.getvalue().encode("utf-8-sig")


def csv_filename(summary: MonthlySummary) -> str:
    return f"time_bank_{summary.employee_id}_{summary.year_month.token}.csv"
