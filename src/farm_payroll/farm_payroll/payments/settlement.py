"""Pure folds over a worker's payment events.

Adjustments are month-level values restated on every payment. The governing
event of a month is its latest payment that is neither a reversal nor
reversed; its adjustments are the ones in force for that month.
"""

from __future__ import annotations

from itertools import groupby
from typing import Iterable, Optional, Sequence

from ..common.money import ZERO, money_sum
from ..payroll.model import NO_ADJUSTMENTS, SalaryAdjustments
from .model import PaymentEvent


def _chronological(events: Iterable[PaymentEvent]) -> list[PaymentEvent]:
    # payment_id is the append order; paid_at follows the wall clock.
    return sorted(events, key=lambda e: e.payment_id)


def reversed_ids(events: Iterable[PaymentEvent]) -> set[int]:
    return {e.reverses_payment_id for e in events if e.reverses_payment_id is not None}


def governing_event(events: Sequence[PaymentEvent]) -> Optional[PaymentEvent]:
    undone = reversed_ids(events)
    live = [e for e in _chronological(events) if not e.is_reversal and e.payment_id not in undone]
    return live[-1] if live else None


def governing_adjustments(events: Sequence[PaymentEvent]) -> SalaryAdjustments:
    event = governing_event(events)
    return event.adjustments if event else NO_ADJUSTMENTS


def paid_total(events: Iterable[PaymentEvent]):
    return money_sum(e.paid_amount for e in events)


def settled_advance(events: Iterable[PaymentEvent]):
    """Advance recovered across all months of a worker's payments."""
    by_month = sorted(events, key=lambda e: e.year_month)
    total = ZERO
    for _, month_events in groupby(by_month, key=lambda e: e.year_month):
        total += governing_adjustments(list(month_events)).advance_deducted
    return total
