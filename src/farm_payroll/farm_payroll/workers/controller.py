from __future__ import annotations

from flask import Flask, current_app, request

from ..common.http import current_farm_id, json_body, json_endpoint, ok
from ..core.exceptions import ValidationError
from ..container import Container

_IDENTITY_FIELDS = frozenset(("worker_id", "farm_id", "created_at"))


def _truthy(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "y"}


def register(app: Flask, container: Container) -> None:
    def farm_id() -> int:
        return current_farm_id(current_app.config.get("DEFAULT_FARM_ID", 1))

    @app.route("/api/workers", methods=["GET"], endpoint="api_workers_list")
    @json_endpoint
    def list_workers():
        workers, pagination = container.worker_service.list_workers(
            farm_id=farm_id(),
            status=request.args.get("status"),
            search=request.args.get("search"),
            role=request.args.get("role"),
            sort=request.args.get("sort") or "name",
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return ok(workers, pagination=pagination)

    @app.route("/api/workers", methods=["POST"], endpoint="api_workers_create")
    @json_endpoint
    def create_worker():
        body = json_body()
        fields = {k: v for k, v in body.items() if k not in _IDENTITY_FIELDS}
        worker = container.worker_service.create_worker(
            farm_id=farm_id(),
            name=fields.pop("name", None),
            role=fields.pop("role", None),
            compensation_mode=fields.pop("compensation_mode", None),
            **fields,
        )
        return ok(worker, status=201)

    @app.route("/api/workers/<int:worker_id>", methods=["GET"], endpoint="api_workers_get")
    @json_endpoint
    def get_worker(worker_id: int):
        worker = container.worker_service.get_worker(worker_id, farm_id=farm_id())
        return ok(worker, outstanding_advance=container.advance_service.outstanding_balance(worker_id))

    @app.route("/api/workers/<int:worker_id>", methods=["PUT"], endpoint="api_workers_update")
    @json_endpoint
    def update_worker(worker_id: int):
        body = json_body()
        locked = _IDENTITY_FIELDS & set(body)
        if locked:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(locked))}")
        worker = container.worker_service.update_worker(worker_id, farm_id=farm_id(), **body)
        return ok(worker)

    @app.route("/api/workers/<int:worker_id>/status", methods=["PATCH"], endpoint="api_workers_status")
    @json_endpoint
    def set_worker_status(worker_id: int):
        body = json_body()
        worker = container.worker_service.set_status(worker_id, body.get("status"), farm_id=farm_id())
        return ok(worker)

    @app.route("/api/workers/<int:worker_id>", methods=["DELETE"], endpoint="api_workers_delete")
    @json_endpoint
    def delete_worker(worker_id: int):
        container.worker_service.delete_worker(
            worker_id,
            confirm=_truthy(request.args.get("confirm")),
            farm_id=farm_id(),
        )
        return ok({"worker_id": worker_id, "deleted": True})
