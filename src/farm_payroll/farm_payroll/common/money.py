from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

ZERO = Decimal("0.00")
_CENT = Decimal("0.01")


def money(value) -> Decimal:
    """Quantize to 2 decimal places (half-up)."""
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return money(sum(values, ZERO))
