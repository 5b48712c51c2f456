from __future__ import annotations

from dataclasses import dataclass

from .balance.service import MonthlyAggregator
from .classification.classifier import DayClassifier
from .classification.factory import ClassificationStrategyFactory
from .core.enums import CompensationPolicy
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .holidays.mysql_holiday_repository import MySQLAbsenceReasonRepository, MySQLHolidayRepository
from .holidays.repository import AbsenceReasonRepository
from .holidays.service import HolidayService
from .ledger.mysql_ledger_repository import MySQLLedgerRepository
from .ledger.service import LedgerService
from .periods.mysql_closing_repository import MySQLClosingRepository
from .periods.mysql_period_repository import MySQLPeriodRepository
from .periods.service import PeriodService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.service import PunchService
from .reporting.service import ReportingService


@dataclass(frozen=True)
class Container:
    absence_reasons_repo: AbsenceReasonRepository

    holiday_service: HolidayService
    period_service: PeriodService
    ledger_service: LedgerService
    punch_service: PunchService
    aggregator: MonthlyAggregator
    reporting_service: ReportingService


def build_services(
    *,
    employees,
    punches,
    ledger,
    periods,
    holidays,
    absence_reasons,
    closings,
    default_policy: CompensationPolicy = CompensationPolicy.OFFSET_AGAINST_OVERTIME,
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""
    holiday_service = HolidayService(holidays)
    period_service = PeriodService(periods)
    ledger_service = LedgerService(ledger, employees, period_service)
    punch_service = PunchService(punches, employees, period_service, absence_reasons)
    aggregator = MonthlyAggregator(
        employees=employees,
        punches=punches,
        ledger=ledger_service,
        holidays=holiday_service,
        classifier=DayClassifier(strategy_factory=ClassificationStrategyFactory()),
    )
    reporting_service = ReportingService(
        aggregator=aggregator,
        ledger=ledger_service,
        periods=period_service,
        employees=employees,
        closings=closings,
        default_policy=default_policy,
    )

    return Container(
        absence_reasons_repo=absence_reasons,
        holiday_service=holiday_service,
        period_service=period_service,
        ledger_service=ledger_service,
        punch_service=punch_service,
        aggregator=aggregator,
        reporting_service=reporting_service,
    )


def build_container(
    *,
    db_config: dict,
    default_policy: CompensationPolicy = CompensationPolicy.OFFSET_AGAINST_OVERTIME,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        employees=MySQLEmployeeRepository(conn),
        punches=MySQLPunchRepository(conn),
        ledger=MySQLLedgerRepository(conn),
        periods=MySQLPeriodRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        absence_reasons=MySQLAbsenceReasonRepository(conn),
        closings=MySQLClosingRepository(conn),
        default_policy=default_policy,
    )
