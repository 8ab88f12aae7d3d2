from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.farm_payroll.farm_payroll.attendance.model import AttendanceRecord
from src.farm_payroll.farm_payroll.core.enums import AttendanceStatus, CompensationMode, PaymentMethod, SalaryStatus
from src.farm_payroll.farm_payroll.payments.model import PaymentEvent
from src.farm_payroll.farm_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator, derive_status
from src.farm_payroll.farm_payroll.payroll.model import SalaryAdjustments
from src.farm_payroll.farm_payroll.workers.model import Worker


def _worker(mode=CompensationMode.DAILY, *, monthly="0", daily="0") -> Worker:
    return Worker(
        worker_id=1,
        farm_id=1,
        name="Asha",
        role="Picker",
        compensation_mode=mode,
        monthly_salary=Decimal(monthly),
        daily_wage=Decimal(daily),
        join_date=date(2025, 1, 1),
    )


def _records(*statuses, overtime="0"):
    return [
        AttendanceRecord(
            attendance_id=i + 1,
            worker_id=1,
            work_date=date(2026, 4, i + 1),
            status=s,
            overtime_hours=Decimal(overtime),
        )
        for i, s in enumerate(statuses)
    ]


def _event(payment_id, amount, *, reverses=None, **adjustments):
    return PaymentEvent(
        payment_id=payment_id,
        worker_id=1,
        year_month="2026-04",
        paid_amount=Decimal(amount),
        method=PaymentMethod.CASH,
        deductions=Decimal(adjustments.get("deductions", "0")),
        advance_deducted=Decimal(adjustments.get("advance_deducted", "0")),
        bonus=Decimal(adjustments.get("bonus", "0")),
        paid_at=datetime(2026, 5, 1, 10, payment_id),
        reverses_payment_id=reverses,
    )


def test_daily_wage_counts_half_days():
    records = _records(
        *([AttendanceStatus.PRESENT] * 20 + [AttendanceStatus.HALF_DAY] * 2 + [AttendanceStatus.ABSENT] * 8)
    )
    salary = StandardPayrollCalculator().compute(
        worker=_worker(daily="500"), year_month="2026-04", records=records, events=[]
    )

    assert salary.total_days == 30
    assert salary.days_worked == Decimal("21.0")
    assert salary.base_salary == Decimal("10500.00")
    assert salary.net_salary == Decimal("10500.00")
    assert salary.present_days == 20
    assert salary.half_days == 2
    assert salary.absent_days == 8
    assert salary.status is SalaryStatus.PENDING


def test_monthly_salary_is_not_prorated():
    salary = StandardPayrollCalculator().compute(
        worker=_worker(CompensationMode.MONTHLY, monthly="12000"), year_month="2026-04", records=[], events=[]
    )

    assert salary.base_salary == Decimal("12000.00")
    assert salary.net_salary == Decimal("12000.00")
    assert salary.balance_due == Decimal("12000.00")
    assert salary.status is SalaryStatus.PENDING


def test_adjustments_and_overtime_reporting():
    records = _records(AttendanceStatus.PRESENT, AttendanceStatus.PRESENT, overtime="2")
    adjustments = SalaryAdjustments(deductions=Decimal("50"), bonus=Decimal("200"), advance_deducted=Decimal("100"))

    plain = StandardPayrollCalculator().compute(
        worker=_worker(daily="400"), year_month="2026-04", records=records, events=[], adjustments=adjustments
    )
    assert plain.overtime_hours == Decimal("4")
    assert plain.overtime_amount == Decimal("200.00")
    assert plain.net_salary == Decimal("850.00")

    with_overtime = StandardPayrollCalculator(include_overtime=True).compute(
        worker=_worker(daily="400"), year_month="2026-04", records=records, events=[], adjustments=adjustments
    )
    assert with_overtime.net_salary == Decimal("1050.00")


def test_governing_event_supplies_adjustments_and_reversal_cancels_it():
    calc = StandardPayrollCalculator()
    worker = _worker(CompensationMode.MONTHLY, monthly="10000")

    events = [_event(1, "3000", bonus="500"), _event(2, "2000", bonus="800", deductions="100")]
    salary = calc.compute(worker=worker, year_month="2026-04", records=[], events=events)
    assert salary.bonus == Decimal("800.00")
    assert salary.net_salary == Decimal("10700.00")
    assert salary.paid_amount == Decimal("5000.00")
    assert salary.status is SalaryStatus.PARTIAL

    events.append(_event(3, "-2000", reverses=2))
    salary = calc.compute(worker=worker, year_month="2026-04", records=[], events=events)
    assert salary.bonus == Decimal("500.00")
    assert salary.net_salary == Decimal("10500.00")
    assert salary.paid_amount == Decimal("3000.00")
    assert salary.payments == 3


@pytest.mark.parametrize(
    "net, paid, has_payments, expected",
    [
        ("1000", "0", False, SalaryStatus.PENDING),
        ("1000", "400", True, SalaryStatus.PARTIAL),
        ("1000", "1000", True, SalaryStatus.PAID),
        ("1000", "1200", True, SalaryStatus.PAID),
        ("0", "0", False, SalaryStatus.PENDING),
        ("0", "0", True, SalaryStatus.PAID),
    ],
)
def test_derive_status(net, paid, has_payments, expected):
    assert derive_status(net_salary=Decimal(net), paid_amount=Decimal(paid), has_payments=has_payments) is expected


def test_append_order_governs_when_clock_steps_back():
    calc = StandardPayrollCalculator()
    worker = _worker(CompensationMode.MONTHLY, monthly="10000")
    earlier = _event(1, "3000", bonus="500")
    later = replace(_event(2, "2000", bonus="800"), paid_at=earlier.paid_at - timedelta(hours=1))

    salary = calc.compute(worker=worker, year_month="2026-04", records=[], events=[later, earlier])

    assert salary.bonus == Decimal("800.00")
    assert salary.net_salary == Decimal("10800.00")
