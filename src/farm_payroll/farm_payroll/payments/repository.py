from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMethod
from .model import PaymentEvent


class PaymentRepository(Protocol):
    """Append-only store of salary settlement events."""

    def create(
        self,
        *,
        worker_id: int,
        year_month: str,
        paid_amount: Decimal,
        method: PaymentMethod,
        deductions: Decimal,
        advance_deducted: Decimal,
        bonus: Decimal,
        paid_at: datetime,
        deduction_notes: Optional[str] = None,
        bonus_notes: Optional[str] = None,
        notes: Optional[str] = None,
        reference: Optional[str] = None,
        reverses_payment_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[PaymentEvent]:
        raise NotImplementedError

    def list_for_worker(self, worker_id: int, *, year_month: Optional[str] = None) -> Sequence[PaymentEvent]:
        """Events of one worker (optionally one month), oldest first."""

        raise NotImplementedError

    def find_by_reference(self, *, worker_id: int, reference: str) -> Optional[PaymentEvent]:
        raise NotImplementedError
