from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import YearMonth
from ..common.http import actor, int_value, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container
from ..reporting.serializers import punch_to_dict
from .service import record_from_payload


def register(app: Flask, container: Container) -> None:
    punches = container.punch_service

    @app.route("/api/punches", methods=["GET"], endpoint="punches_list")
    def punches_list():
        employee_id = int_value(request.args.get("employee_id"), "employee_id")
        year_month = YearMonth.parse(request.args.get("year_month"))
        records = punches.list_month(employee_id, year_month)
        return ok({"year_month": year_month.token, "records": [punch_to_dict(r) for r in records]})

    @app.route("/api/punches", methods=["PUT"], endpoint="punches_save")
    def punches_save():
        data = json_body()
        employee_id = int_value(data.get("employee_id"), "employee_id")
        raw_records = data.get("records")
        if raw_records is None:
            raw_records = []
        if not isinstance(raw_records, list):
            raise ValidationError("records must be a list", field="records")

        stored = punches.save_day_records(
            employee_id=employee_id,
            year=int_value(data.get("year"), "year"),
            month=int_value(data.get("month"), "month"),
            records=[record_from_payload(employee_id, r) for r in raw_records],
            actor=actor(),
        )
        return ok({"stored": stored})
