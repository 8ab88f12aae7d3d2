from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...attendance.model import AttendanceRecord
from ...payments.model import PaymentEvent
from ...workers.model import Worker
from ..model import MonthlySalary, SalaryAdjustments


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        *,
        worker: Worker,
        year_month: str,
        records: Sequence[AttendanceRecord],
        events: Sequence[PaymentEvent],
        adjustments: Optional[SalaryAdjustments] = None,
    ) -> MonthlySalary:
        raise NotImplementedError
