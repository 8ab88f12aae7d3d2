from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import CompensationMode, WorkerStatus


@dataclass(frozen=True)
class WorkerDraft:
    """Fields of a worker before the directory assigns an id."""

    farm_id: int
    name: str
    role: str
    compensation_mode: CompensationMode
    monthly_salary: Decimal
    daily_wage: Decimal
    join_date: date
    status: WorkerStatus = WorkerStatus.ACTIVE
    phone: str = ""
    address: str = ""
    village: str = ""
    emergency_contact: str = ""
    bank_account: str = ""
    ifsc: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Worker:
    """Domain entity: a farm worker.

    Plain data object; the directory service owns validation and the
    repositories own persistence.
    """

    worker_id: int
    farm_id: int
    name: str
    role: str
    compensation_mode: CompensationMode
    monthly_salary: Decimal
    daily_wage: Decimal
    join_date: date
    status: WorkerStatus = WorkerStatus.ACTIVE
    phone: str = ""
    address: str = ""
    village: str = ""
    emergency_contact: str = ""
    bank_account: str = ""
    ifsc: str = ""
    notes: str = ""
    created_at: Optional[datetime] = None

    @property
    def on_roster(self) -> bool:
        return self.status.on_roster

    @property
    def rate(self) -> Decimal:
        if self.compensation_mode is CompensationMode.DAILY:
            return self.daily_wage
        return self.monthly_salary
