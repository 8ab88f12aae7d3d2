from __future__ import annotations

from datetime import date

from flask import Flask, current_app, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_farm_id, json_body, json_endpoint, ok
from ..core.exceptions import ValidationError
from ..container import Container


def _date_arg(value, *, default=None):
    value = (value or "").strip()
    return parse_iso_date(value) if value else default


def register(app: Flask, container: Container) -> None:
    def farm_id() -> int:
        return current_farm_id(current_app.config.get("DEFAULT_FARM_ID", 1))

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="api_attendance_daily")
    @json_endpoint
    def daily_sheet():
        work_date = _date_arg(request.args.get("date"), default=date.today())
        sheet = container.attendance_service.get_daily_roster(farm_id=farm_id(), work_date=work_date)
        return ok(sheet, date=work_date)

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="api_attendance_bulk")
    @json_endpoint
    def save_daily_sheet():
        body = json_body()
        work_date = _date_arg(body.get("date"))
        if work_date is None:
            raise ValidationError("date is required")
        entries = body.get("entries")
        if not isinstance(entries, list):
            raise ValidationError("entries must be a list")

        result = container.attendance_service.bulk_upsert(farm_id=farm_id(), work_date=work_date, entries=entries)
        return ok(result, date=work_date)

    @app.route("/api/attendance/history/<int:worker_id>", methods=["GET"], endpoint="api_attendance_history")
    @json_endpoint
    def history(worker_id: int):
        container.worker_service.get_worker(worker_id, farm_id=farm_id())
        result = container.attendance_service.get_history(
            worker_id=worker_id,
            start_date=_date_arg(request.args.get("start_date")),
            end_date=_date_arg(request.args.get("end_date")),
        )
        return ok(result)
