from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AdvancePayment


class AdvanceRepository(Protocol):
    """Append-only store of advances; there is deliberately no update or delete."""

    def create(self, *, worker_id: int, amount: Decimal, advance_date: date, notes: Optional[str] = None) -> int:
        raise NotImplementedError

    def get_by_id(self, advance_id: int) -> Optional[AdvancePayment]:
        raise NotImplementedError

    def list_for_worker(self, worker_id: int) -> Sequence[AdvancePayment]:
        raise NotImplementedError
