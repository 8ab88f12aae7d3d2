from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from ..advances.service import AdvanceService
from ..common.datetime_utils import now_local, parse_year_month
from ..common.money import ZERO, money
from ..common.validators import optional_text, require_non_negative_amount
from ..core.enums import PaymentMethod
from ..core.exceptions import (
    AdvanceOverDeductionError,
    DuplicatePaymentError,
    NotFoundError,
    UnknownWorkerError,
    ValidationError,
)
from ..payroll.model import MonthlySalary, SalaryAdjustments
from ..payroll.service import PayrollService
from ..workers.repository import WorkerRepository
from .model import PaymentEvent, PaymentReceipt
from .repository import PaymentRepository
from .settlement import governing_adjustments

logger = logging.getLogger(__name__)


def parse_payment_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value or "cash").strip().lower())
    except ValueError:
        raise ValidationError("Payment method must be one of: cash, upi, bank, other")


def _adjustment(value: Any, carried: Decimal, field_name: str) -> Decimal:
    if value is None or value == "":
        return carried
    return money(require_non_negative_amount(value, field_name))


class PaymentService:
    """Payment ledger: append settlement events and return the recomputed salary."""

    def __init__(
        self,
        payments: PaymentRepository,
        workers: WorkerRepository,
        payroll: PayrollService,
        advances: AdvanceService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payments = payments
        self._workers = workers
        self._payroll = payroll
        self._advances = advances
        self._clock = clock

    def _check_advance(self, *, worker_id: int, current: Decimal, proposed: Decimal) -> None:
        increase = proposed - current
        if increase <= 0:
            return
        outstanding = self._advances.outstanding_balance(worker_id)
        if increase > outstanding:
            raise AdvanceOverDeductionError(
                f"Advance deduction of {proposed} exceeds the outstanding advance balance of {outstanding + current}"
            )

    def _resolve_adjustments(
        self, *, worker_id: int, year_month: str, deductions: Any, bonus: Any, advance_deducted: Any
    ) -> tuple[SalaryAdjustments, SalaryAdjustments]:
        carried = governing_adjustments(self._payments.list_for_worker(worker_id, year_month=year_month))
        return carried, SalaryAdjustments(
            deductions=_adjustment(deductions, carried.deductions, "Deductions"),
            bonus=_adjustment(bonus, carried.bonus, "Bonus"),
            advance_deducted=_adjustment(advance_deducted, carried.advance_deducted, "Advance deducted"),
        )

    def preview_salary(
        self,
        *,
        worker_id: int,
        year_month: str,
        deductions: Any = None,
        advance_deducted: Any = None,
        bonus: Any = None,
    ) -> MonthlySalary:
        """Salary as it would stand with the given adjustments; nothing is written."""
        year_month = (year_month or "").strip()
        self._payroll.compute_monthly_salary(worker_id=worker_id, year_month=year_month)
        carried, adjustments = self._resolve_adjustments(
            worker_id=int(worker_id),
            year_month=year_month,
            deductions=deductions,
            bonus=bonus,
            advance_deducted=advance_deducted,
        )
        self._check_advance(
            worker_id=int(worker_id),
            current=carried.advance_deducted,
            proposed=adjustments.advance_deducted,
        )
        return self._payroll.compute_monthly_salary(worker_id=worker_id, year_month=year_month, adjustments=adjustments)

    def record_payment(
        self,
        *,
        worker_id: int,
        year_month: str,
        paid_amount: Any = None,
        method: Any = PaymentMethod.CASH,
        deductions: Any = None,
        advance_deducted: Any = None,
        bonus: Any = None,
        deduction_notes: Optional[str] = None,
        bonus_notes: Optional[str] = None,
        notes: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> PaymentReceipt:
        """Append a payment for one worker and month.

        Adjustments left as None carry forward from the month's governing
        payment. A missing ``paid_amount`` settles the remaining balance.
        """
        year_month = (year_month or "").strip()
        parse_year_month(year_month)
        pay_method = parse_payment_method(method)
        paid = money(require_non_negative_amount(paid_amount, "Paid amount")) if paid_amount not in (None, "") else None
        reference = optional_text(reference)

        # Computing first rejects unknown workers and periods before any write.
        current = self._payroll.compute_monthly_salary(worker_id=worker_id, year_month=year_month)
        carried, adjustments = self._resolve_adjustments(
            worker_id=int(worker_id),
            year_month=year_month,
            deductions=deductions,
            bonus=bonus,
            advance_deducted=advance_deducted,
        )

        if reference and self._payments.find_by_reference(worker_id=int(worker_id), reference=reference):
            raise DuplicatePaymentError(f"Payment reference {reference!r} was already recorded")

        self._check_advance(
            worker_id=int(worker_id),
            current=carried.advance_deducted,
            proposed=adjustments.advance_deducted,
        )

        if paid is None:
            preview = self._payroll.compute_monthly_salary(
                worker_id=worker_id, year_month=year_month, adjustments=adjustments
            )
            paid = preview.balance_due

        payment_id = self._payments.create(
            worker_id=int(worker_id),
            year_month=year_month,
            paid_amount=paid,
            method=pay_method,
            deductions=adjustments.deductions,
            advance_deducted=adjustments.advance_deducted,
            bonus=adjustments.bonus,
            paid_at=self._clock(),
            deduction_notes=optional_text(deduction_notes),
            bonus_notes=optional_text(bonus_notes),
            notes=optional_text(notes),
            reference=reference,
        )
        payment = self._payments.get_by_id(payment_id)
        salary = self._payroll.compute_monthly_salary(worker_id=worker_id, year_month=year_month)
        logger.info(
            "Salary paid to %s: %s for %s via %s (status %s)",
            current.worker_name,
            paid,
            year_month,
            pay_method.value,
            salary.status.value,
        )
        return PaymentReceipt(payment=payment, salary=salary)

    def reverse_payment(
        self, *, payment_id: int, notes: Optional[str] = None, farm_id: Optional[int] = None
    ) -> PaymentReceipt:
        """Append a compensating event that cancels ``payment_id``.

        With ``farm_id`` given, payments of other farms' workers are reported as not found.
        """
        original = self._payments.get_by_id(int(payment_id))
        owner = self._workers.get_by_id(original.worker_id) if original else None
        if not original or (farm_id is not None and (not owner or owner.farm_id != int(farm_id))):
            raise NotFoundError(f"Payment {payment_id} not found")
        if original.is_reversal:
            raise ValidationError("A reversal cannot itself be reversed")

        events = list(self._payments.list_for_worker(original.worker_id, year_month=original.year_month))
        if any(e.reverses_payment_id == original.payment_id for e in events):
            raise ValidationError(f"Payment {payment_id} was already reversed")

        remaining = [e for e in events if e.payment_id != original.payment_id]
        self._check_advance(
            worker_id=original.worker_id,
            current=governing_adjustments(events).advance_deducted,
            proposed=governing_adjustments(remaining).advance_deducted,
        )

        reversal_id = self._payments.create(
            worker_id=original.worker_id,
            year_month=original.year_month,
            paid_amount=-original.paid_amount,
            method=original.method,
            deductions=ZERO,
            advance_deducted=ZERO,
            bonus=ZERO,
            paid_at=self._clock(),
            notes=optional_text(notes) or f"Reversal of payment {original.payment_id}",
            reverses_payment_id=original.payment_id,
        )
        reversal = self._payments.get_by_id(reversal_id)
        salary = self._payroll.compute_monthly_salary(worker_id=original.worker_id, year_month=original.year_month)
        logger.info("Payment %s reversed for worker %s (%s)", original.payment_id, original.worker_id, original.year_month)
        return PaymentReceipt(payment=reversal, salary=salary)

    def list_payments(self, *, worker_id: int, year_month: Optional[str] = None) -> list[PaymentEvent]:
        if not self._workers.get_by_id(int(worker_id)):
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        if year_month:
            year_month = year_month.strip()
            parse_year_month(year_month)
        return list(self._payments.list_for_worker(int(worker_id), year_month=year_month or None))
