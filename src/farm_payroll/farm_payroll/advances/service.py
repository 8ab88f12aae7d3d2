from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..common.money import money, money_sum
from ..common.validators import optional_text, require_positive_amount
from ..core.exceptions import UnknownWorkerError
from ..payments.repository import PaymentRepository
from ..payments.settlement import settled_advance
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .model import AdvancePayment, AdvanceStatement
from .repository import AdvanceRepository

logger = logging.getLogger(__name__)


class AdvanceService:
    """Advance ledger: record advances and derive each worker's outstanding balance.

    outstanding = sum(advances) - advance recovered through salary payments.
    """

    def __init__(self, advances: AdvanceRepository, payments: PaymentRepository, workers: WorkerRepository):
        self._advances = advances
        self._payments = payments
        self._workers = workers

    def _get_worker(self, worker_id: int) -> Worker:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        return worker

    def record_advance(
        self,
        *,
        worker_id: int,
        amount: Any,
        notes: Optional[str] = None,
        advance_date: Optional[date] = None,
    ) -> AdvancePayment:
        value = money(require_positive_amount(amount, "Advance amount"))
        worker = self._get_worker(worker_id)
        if not worker.on_roster:
            raise UnknownWorkerError(f"Worker {worker_id} is not active")

        advance_id = self._advances.create(
            worker_id=worker.worker_id,
            amount=value,
            advance_date=advance_date or date.today(),
            notes=optional_text(notes),
        )
        logger.info("Advance recorded: %s to %s (id=%s)", value, worker.name, worker.worker_id)
        return self._advances.get_by_id(advance_id)

    def total_advanced(self, worker_id: int) -> Decimal:
        return money_sum(a.amount for a in self._advances.list_for_worker(int(worker_id)))

    def total_recovered(self, worker_id: int) -> Decimal:
        return money(settled_advance(self._payments.list_for_worker(int(worker_id))))

    def outstanding_balance(self, worker_id: int) -> Decimal:
        self._get_worker(worker_id)
        return money(self.total_advanced(worker_id) - self.total_recovered(worker_id))

    def list_advances(self, worker_id: int) -> list[AdvancePayment]:
        self._get_worker(worker_id)
        return sorted(self._advances.list_for_worker(int(worker_id)), key=lambda a: (a.advance_date, a.advance_id))

    def statement(self, worker_id: int) -> AdvanceStatement:
        advances = self.list_advances(worker_id)
        advanced = money_sum(a.amount for a in advances)
        recovered = self.total_recovered(worker_id)
        return AdvanceStatement(
            worker_id=int(worker_id),
            advances=advances,
            total_advanced=advanced,
            total_recovered=recovered,
            outstanding=money(advanced - recovered),
        )
