from __future__ import annotations

from flask import Flask

from ..common.http import int_value, json_body, ok
from ..container import Container
from ..reporting.serializers import absence_reason_to_dict, holiday_to_dict


def register(app: Flask, container: Container) -> None:
    holidays = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        return ok([holiday_to_dict(h) for h in holidays.list_all()])

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_upsert")
    def holidays_upsert():
        data = json_body()
        holiday_id = holidays.upsert(
            day=int_value(data.get("day"), "day"),
            month=int_value(data.get("month"), "month"),
            description=str(data.get("description") or ""),
        )
        return ok({"holiday_id": holiday_id}, 201)

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_deactivate")
    def holidays_deactivate(holiday_id: int):
        holidays.deactivate(holiday_id=holiday_id)
        return ok({"holiday_id": holiday_id})

    @app.route("/api/absence-reasons", methods=["GET"], endpoint="absence_reasons_list")
    def absence_reasons_list():
        return ok([absence_reason_to_dict(r) for r in container.absence_reasons_repo.list_active()])
