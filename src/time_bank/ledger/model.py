from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import YearMonth
from ..core.enums import LedgerEntryKind


@dataclass(frozen=True)
class NewLedgerEntry:
    employee_id: int
    year_month: YearMonth
    minutes: int
    kind: LedgerEntryKind = LedgerEntryKind.MANUAL_ADJUSTMENT
    note: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Signed-minute posting in an employee's time bank. Immutable once stored."""

    entry_id: int
    employee_id: int
    year_month: YearMonth
    minutes: int
    kind: LedgerEntryKind
    created_at: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class LedgerTotals:
    """Ledger entries of one employee split around a target month."""

    carry_over_min: int = 0
    manual_min: int = 0
    closure_min: int = 0
    current_entries: tuple[LedgerEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_entries(cls, entries, year_month: YearMonth) -> "LedgerTotals":
        carry = manual = closure = 0
        current = []
        for e in entries:
            if e.year_month < year_month:
                carry += e.minutes
            elif e.year_month == year_month:
                if e.kind.is_closure:
                    closure += e.minutes
                else:
                    manual += e.minutes
                current.append(e)
        return cls(carry_over_min=carry, manual_min=manual, closure_min=closure, current_entries=tuple(current))
