from __future__ import annotations

from flask import Flask, current_app

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_farm_id, json_body, json_endpoint, ok
from ..common.validators import require_positive_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def farm_id() -> int:
        return current_farm_id(current_app.config.get("DEFAULT_FARM_ID", 1))

    @app.route("/api/advances", methods=["POST"], endpoint="api_advances_create")
    @json_endpoint
    def record_advance():
        body = json_body()
        worker = container.worker_service.get_worker(
            require_positive_int(body.get("worker_id"), "worker_id"), farm_id=farm_id()
        )
        advance_date = body.get("advance_date") or body.get("date")
        advance = container.advance_service.record_advance(
            worker_id=worker.worker_id,
            amount=body.get("amount"),
            notes=body.get("notes"),
            advance_date=parse_iso_date(advance_date) if advance_date else None,
        )
        return ok(
            advance,
            status=201,
            outstanding_advance=container.advance_service.outstanding_balance(worker.worker_id),
        )

    @app.route("/api/advances/<int:worker_id>", methods=["GET"], endpoint="api_advances_statement")
    @json_endpoint
    def advance_statement(worker_id: int):
        container.worker_service.get_worker(worker_id, farm_id=farm_id())
        return ok(container.advance_service.statement(worker_id))
