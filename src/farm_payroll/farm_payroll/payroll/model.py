from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import CompensationMode, SalaryStatus


@dataclass(frozen=True)
class SalaryAdjustments:
    """Operator-supplied month-level adjustments applied to base pay."""

    deductions: Decimal = ZERO
    bonus: Decimal = ZERO
    advance_deducted: Decimal = ZERO


NO_ADJUSTMENTS = SalaryAdjustments()


@dataclass(frozen=True)
class MonthlySalary:
    """Derived payroll snapshot for one worker and one month (never stored)."""

    worker_id: int
    worker_name: str
    year_month: str
    compensation_mode: CompensationMode
    rate: Decimal
    total_days: int
    days_worked: Decimal
    present_days: int
    half_days: int
    absent_days: int
    leave_days: int
    holiday_days: int
    overtime_hours: Decimal
    overtime_amount: Decimal
    base_salary: Decimal
    deductions: Decimal
    bonus: Decimal
    advance_deducted: Decimal
    net_salary: Decimal
    paid_amount: Decimal
    balance_due: Decimal
    status: SalaryStatus
    payments: int = 0
    last_paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollTotals:
    total_workers: int
    total_salary: Decimal
    total_paid: Decimal
    total_pending: Decimal


@dataclass(frozen=True)
class PayrollSheet:
    year_month: str
    salaries: list[MonthlySalary] = field(default_factory=list)
    totals: Optional[PayrollTotals] = None
