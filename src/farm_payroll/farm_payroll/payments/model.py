from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMethod
from ..payroll.model import MonthlySalary, SalaryAdjustments


@dataclass(frozen=True)
class PaymentEvent:
    """Domain entity: one settlement against a worker's monthly salary.

    Append-only. A reversal is a separate event with the negated amount and
    ``reverses_payment_id`` pointing at the original.
    """

    payment_id: int
    worker_id: int
    year_month: str
    paid_amount: Decimal
    method: PaymentMethod
    deductions: Decimal
    advance_deducted: Decimal
    bonus: Decimal
    paid_at: datetime
    deduction_notes: Optional[str] = None
    bonus_notes: Optional[str] = None
    notes: Optional[str] = None
    reference: Optional[str] = None
    reverses_payment_id: Optional[int] = None

    @property
    def is_reversal(self) -> bool:
        return self.reverses_payment_id is not None

    @property
    def adjustments(self) -> SalaryAdjustments:
        return SalaryAdjustments(deductions=self.deductions, bonus=self.bonus, advance_deducted=self.advance_deducted)


@dataclass(frozen=True)
class PaymentReceipt:
    payment: PaymentEvent
    salary: MonthlySalary
