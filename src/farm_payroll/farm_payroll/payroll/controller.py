from __future__ import annotations

from datetime import date

from flask import Flask, current_app, request

from ..common.datetime_utils import format_year_month
from ..common.http import current_farm_id, json_body, json_endpoint, ok
from ..common.validators import require_positive_int
from ..container import Container

_ADJUSTMENT_ARGS = ("deductions", "bonus", "advance_deducted")


def register(app: Flask, container: Container) -> None:
    def farm_id() -> int:
        return current_farm_id(current_app.config.get("DEFAULT_FARM_ID", 1))

    @app.route("/api/payroll/monthly", methods=["GET"], endpoint="api_payroll_monthly")
    @json_endpoint
    def monthly_payroll():
        year_month = request.args.get("month") or format_year_month(date.today())
        sheet = container.payroll_service.monthly_payroll(farm_id=farm_id(), year_month=year_month)
        return ok(sheet.salaries, month=sheet.year_month, totals=sheet.totals)

    @app.route("/api/payroll/<int:worker_id>/<month>", methods=["GET"], endpoint="api_payroll_worker")
    @json_endpoint
    def worker_salary(worker_id: int, month: str):
        container.worker_service.get_worker(worker_id, farm_id=farm_id())
        preview = {k: request.args.get(k) for k in _ADJUSTMENT_ARGS if request.args.get(k) not in (None, "")}
        if preview:
            salary = container.payment_service.preview_salary(worker_id=worker_id, year_month=month, **preview)
        else:
            salary = container.payroll_service.compute_monthly_salary(worker_id=worker_id, year_month=month)
        return ok(salary, outstanding_advance=container.advance_service.outstanding_balance(worker_id))

    @app.route("/api/payroll/pay", methods=["POST"], endpoint="api_payroll_pay")
    @json_endpoint
    def pay_salary():
        body = json_body()
        worker = container.worker_service.get_worker(
            require_positive_int(body.get("worker_id"), "worker_id"), farm_id=farm_id()
        )
        receipt = container.payment_service.record_payment(
            worker_id=worker.worker_id,
            year_month=body.get("month") or body.get("year_month") or "",
            paid_amount=body.get("paid_amount"),
            method=body.get("method") or body.get("payment_method"),
            deductions=body.get("deductions"),
            advance_deducted=body.get("advance_deducted"),
            bonus=body.get("bonus"),
            deduction_notes=body.get("deduction_notes"),
            bonus_notes=body.get("bonus_notes"),
            notes=body.get("notes"),
            reference=body.get("reference"),
        )
        return ok(receipt, status=201)

    @app.route("/api/payroll/payments/<int:payment_id>/reverse", methods=["POST"], endpoint="api_payroll_reverse")
    @json_endpoint
    def reverse_payment(payment_id: int):
        body = request.get_json(silent=True) or {}
        receipt = container.payment_service.reverse_payment(
            payment_id=payment_id, notes=body.get("notes"), farm_id=farm_id()
        )
        return ok(receipt, status=201)

    @app.route("/api/payroll/payments/<int:worker_id>", methods=["GET"], endpoint="api_payroll_payments")
    @json_endpoint
    def payment_history(worker_id: int):
        container.worker_service.get_worker(worker_id, farm_id=farm_id())
        events = container.payment_service.list_payments(worker_id=worker_id, year_month=request.args.get("month"))
        return ok(events)
