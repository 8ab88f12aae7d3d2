from __future__ import annotations

from datetime import date

from flask import Flask, current_app

from ..common.http import current_farm_id, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats/overview", methods=["GET"], endpoint="api_stats_overview")
    @json_endpoint
    def overview():
        farm_id = current_farm_id(current_app.config.get("DEFAULT_FARM_ID", 1))
        return ok(container.stats_service.overview(farm_id=farm_id, today=date.today()))
