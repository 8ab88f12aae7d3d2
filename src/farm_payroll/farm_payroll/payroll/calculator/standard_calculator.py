from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...attendance.model import AttendanceRecord, AttendanceSummary
from ...common.datetime_utils import days_in_month
from ...common.money import ZERO, money
from ...core.constants import OVERTIME_HOURS_PER_DAY
from ...core.enums import CompensationMode, SalaryStatus
from ...payments.model import PaymentEvent
from ...payments.settlement import governing_adjustments, governing_event, paid_total
from ...workers.model import Worker
from ..model import MonthlySalary, SalaryAdjustments
from .base import PayrollCalculator


def derive_status(*, net_salary: Decimal, paid_amount: Decimal, has_payments: bool) -> SalaryStatus:
    if has_payments and paid_amount >= net_salary:
        return SalaryStatus.PAID
    if paid_amount > 0:
        return SalaryStatus.PARTIAL
    return SalaryStatus.PENDING


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    - days worked: present = 1, half-day = 0.5, anything else = 0
    - base: fixed salary for monthly workers (no proration), wage x days for daily workers
    - net: base + bonus - deductions - advance deducted (+ overtime pay when enabled)
    """

    def __init__(self, *, include_overtime: bool = False, overtime_hours_per_day: int = OVERTIME_HOURS_PER_DAY):
        self._include_overtime = bool(include_overtime)
        self._hours_per_day = Decimal(overtime_hours_per_day)

    def compute(
        self,
        *,
        worker: Worker,
        year_month: str,
        records: Sequence[AttendanceRecord],
        events: Sequence[PaymentEvent],
        adjustments: Optional[SalaryAdjustments] = None,
    ) -> MonthlySalary:
        total_days = days_in_month(year_month)
        summary = AttendanceSummary.from_records(records)

        if worker.compensation_mode is CompensationMode.DAILY:
            base = money(worker.daily_wage * summary.days_worked)
            per_day = worker.daily_wage
        else:
            base = money(worker.monthly_salary)
            per_day = worker.monthly_salary / total_days

        overtime_amount = money(summary.total_overtime * per_day / self._hours_per_day)

        adj = adjustments if adjustments is not None else governing_adjustments(events)
        net = base + adj.bonus - adj.deductions - adj.advance_deducted
        if self._include_overtime:
            net += overtime_amount
        net = money(net)

        paid = paid_total(events)
        settled = [e.paid_at for e in events if not e.is_reversal]

        return MonthlySalary(
            worker_id=worker.worker_id,
            worker_name=worker.name,
            year_month=year_month,
            compensation_mode=worker.compensation_mode,
            rate=worker.rate,
            total_days=total_days,
            days_worked=summary.days_worked,
            present_days=summary.present,
            half_days=summary.half_day,
            absent_days=summary.absent,
            leave_days=summary.leave,
            holiday_days=summary.holiday,
            overtime_hours=summary.total_overtime,
            overtime_amount=overtime_amount,
            base_salary=base,
            deductions=money(adj.deductions),
            bonus=money(adj.bonus),
            advance_deducted=money(adj.advance_deducted),
            net_salary=net,
            paid_amount=paid,
            balance_due=max(money(net - paid), ZERO),
            status=derive_status(net_salary=net, paid_amount=paid, has_payments=governing_event(events) is not None),
            payments=len(events),
            last_paid_at=max(settled) if settled else None,
        )
