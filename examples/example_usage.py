"""Example: call the service layer directly (no Flask).

Prints the March 2025 summary of employee 1 from the seeded database.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from time_bank.common.datetime_utils import minutes_to_hhmm
from time_bank.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    summary = container.reporting_service.get_monthly_summary(employee_id=1, year=2025, month=3)
    for day in summary.days:
        print(day.work_date, day.weekday, day.category.value, minutes_to_hhmm(day.impact_minutes))
    print("technical balance:", minutes_to_hhmm(summary.technical_balance_min))


if __name__ == "__main__":
    main()
