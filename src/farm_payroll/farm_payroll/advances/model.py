from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AdvancePayment:
    """Domain entity: cash paid to a worker ahead of salary. Append-only."""

    advance_id: int
    worker_id: int
    amount: Decimal
    advance_date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AdvanceStatement:
    worker_id: int
    advances: list[AdvancePayment]
    total_advanced: Decimal
    total_recovered: Decimal
    outstanding: Decimal
