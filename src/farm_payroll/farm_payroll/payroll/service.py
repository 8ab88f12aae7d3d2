from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import month_bounds
from ..common.money import ZERO, money_sum
from ..core.exceptions import UnknownPeriodError, UnknownWorkerError
from ..payments.repository import PaymentRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MonthlySalary, PayrollSheet, PayrollTotals, SalaryAdjustments


def ensure_period(worker: Worker, year_month: str) -> tuple[date, date]:
    """Month bounds, provided the worker had joined by the end of the month."""
    start, end = month_bounds(year_month)
    if worker.join_date and end < worker.join_date:
        raise UnknownPeriodError(f"{worker.name} joined on {worker.join_date:%Y-%m-%d}; no salary for {year_month}")
    return start, end


class PayrollService:
    """Computes monthly salary snapshots on demand; nothing here is persisted."""

    def __init__(
        self,
        workers: WorkerRepository,
        attendance: AttendanceService,
        payments: PaymentRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._workers = workers
        self._attendance = attendance
        self._payments = payments
        self._calculator = calculator or StandardPayrollCalculator()

    def _salary_for(self, worker: Worker, year_month: str, adjustments: Optional[SalaryAdjustments]) -> MonthlySalary:
        ensure_period(worker, year_month)
        records = self._attendance.records_for_month(worker_id=worker.worker_id, year_month=year_month)
        events = self._payments.list_for_worker(worker.worker_id, year_month=year_month)
        return self._calculator.compute(
            worker=worker,
            year_month=year_month,
            records=list(records),
            events=list(events),
            adjustments=adjustments,
        )

    def compute_monthly_salary(
        self,
        *,
        worker_id: int,
        year_month: str,
        adjustments: Optional[SalaryAdjustments] = None,
    ) -> MonthlySalary:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        return self._salary_for(worker, year_month.strip(), adjustments)

    def monthly_payroll(self, *, farm_id: int, year_month: str) -> PayrollSheet:
        year_month = year_month.strip()
        _, end = month_bounds(year_month)

        salaries = []
        for worker in self._workers.list_for_farm(farm_id=int(farm_id), sort="name"):
            if not worker.on_roster or (worker.join_date and worker.join_date > end):
                continue
            salaries.append(self._salary_for(worker, year_month, None))

        totals = PayrollTotals(
            total_workers=len(salaries),
            total_salary=money_sum(s.net_salary for s in salaries),
            total_paid=money_sum(s.paid_amount for s in salaries),
            total_pending=money_sum(max(s.net_salary - s.paid_amount, ZERO) for s in salaries),
        )
        return PayrollSheet(year_month=year_month, salaries=salaries, totals=totals)
