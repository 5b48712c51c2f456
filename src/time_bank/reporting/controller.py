from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import YearMonth, parse_iso_date
from ..common.http import actor, bool_value, int_value, json_body, ok, policy_value
from ..core.enums import PeriodStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .export import csv_filename, export_summary_csv
from .serializers import closing_to_dict, ledger_entry_to_dict, period_to_dict, rollup_row_to_dict, summary_to_dict


def register(app: Flask, container: Container) -> None:
    reporting = container.reporting_service

    def _summary_from_args():
        args = request.args
        return reporting.get_monthly_summary(
            employee_id=int_value(args.get("employee_id"), "employee_id"),
            year=int_value(args.get("year"), "year"),
            month=int_value(args.get("month"), "month"),
            policy=policy_value(args.get("policy"), reporting.default_policy),
            zero_at_month_end=bool_value(args.get("zero_at_month_end")),
        )

    def _statuses(raw):
        if not raw:
            return None
        try:
            return [PeriodStatus(s.strip().upper()) for s in raw.split(",") if s.strip()]
        except ValueError:
            raise ValidationError(f"Unknown period status in '{raw}'", field="status")

    @app.route("/api/time-bank/summary", methods=["GET"], endpoint="time_bank_summary")
    def time_bank_summary():
        return ok(summary_to_dict(_summary_from_args()))

    @app.route("/api/time-bank/summary.csv", methods=["GET"], endpoint="time_bank_summary_csv")
    def time_bank_summary_csv():
        summary = _summary_from_args()
        return app.response_class(
            export_summary_csv(summary),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={csv_filename(summary)}"},
        )

    @app.route("/api/time-bank/rollup", methods=["GET"], endpoint="time_bank_rollup")
    def time_bank_rollup():
        args = request.args
        year_month = YearMonth.parse(args.get("year_month"))
        rows = reporting.fleet_rollup(
            year_month,
            policy=policy_value(args.get("policy"), reporting.default_policy),
            department_id=int_value(args.get("department_id"), "department_id", required=False),
        )
        return ok({"year_month": year_month.token, "rows": [rollup_row_to_dict(r) for r in rows]})

    @app.route("/api/time-bank/adjustments", methods=["POST"], endpoint="time_bank_add_adjustment")
    def time_bank_add_adjustment():
        data = json_body()
        try:
            day = parse_iso_date(str(data.get("date") or "").strip())
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD", field="date")

        entry = reporting.add_manual_adjustment(
            employee_id=int_value(data.get("employee_id"), "employee_id"),
            day=day,
            minutes=int_value(data.get("minutes"), "minutes"),
            note=data.get("note"),
            actor=actor(),
        )
        return ok(ledger_entry_to_dict(entry), 201)

    @app.route(
        "/api/time-bank/adjustments/<int:entry_id>", methods=["DELETE"], endpoint="time_bank_remove_adjustment"
    )
    def time_bank_remove_adjustment(entry_id: int):
        entry = reporting.remove_manual_adjustment(entry_id, actor=actor())
        return ok(ledger_entry_to_dict(entry))

    @app.route("/api/time-bank/periods/close", methods=["POST"], endpoint="time_bank_close_period")
    def time_bank_close_period():
        data = json_body()
        result = reporting.close_period(
            employee_id=int_value(data.get("employee_id"), "employee_id"),
            year=int_value(data.get("year"), "year"),
            month=int_value(data.get("month"), "month"),
            actor=actor(),
            settle=bool_value(data.get("settle")),
            policy=policy_value(data.get("policy"), reporting.default_policy),
        )
        entry = result.settlement_entry
        return ok(
            {
                "period": period_to_dict(result.period),
                "settlement_entry": ledger_entry_to_dict(entry) if entry else None,
                "closing": closing_to_dict(result.closing) if result.closing else None,
            }
        )

    @app.route("/api/time-bank/periods/reopen", methods=["POST"], endpoint="time_bank_reopen_period")
    def time_bank_reopen_period():
        data = json_body()
        period = reporting.reopen_period(
            employee_id=int_value(data.get("employee_id"), "employee_id"),
            year=int_value(data.get("year"), "year"),
            month=int_value(data.get("month"), "month"),
            actor=actor(),
        )
        return ok(period_to_dict(period))

    @app.route("/api/time-bank/periods", methods=["GET"], endpoint="time_bank_periods")
    def time_bank_periods():
        args = request.args
        periods = reporting.list_available_periods(
            employee_id=int_value(args.get("employee_id"), "employee_id"),
            year=int_value(args.get("year"), "year"),
            statuses=_statuses(args.get("status")),
        )
        return ok([period_to_dict(p) for p in periods])

    @app.route("/api/time-bank/period", methods=["GET"], endpoint="time_bank_period")
    def time_bank_period():
        args = request.args
        key = dict(
            employee_id=int_value(args.get("employee_id"), "employee_id"),
            year=int_value(args.get("year"), "year"),
            month=int_value(args.get("month"), "month"),
        )
        data = period_to_dict(reporting.period_status(**key))
        closing = reporting.get_closing(**key)
        data["closing"] = closing_to_dict(closing) if closing else None
        return ok(data)

    @app.route("/api/time-bank/closings", methods=["GET"], endpoint="time_bank_closings")
    def time_bank_closings():
        closings = reporting.list_closings(employee_id=int_value(request.args.get("employee_id"), "employee_id"))
        return ok([closing_to_dict(c) for c in closings])
