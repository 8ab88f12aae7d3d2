from __future__ import annotations

import calendar
from datetime import date

from ..advances.service import AdvanceService
from ..attendance.service import AttendanceService
from ..common.money import ZERO, money, money_sum
from ..core.enums import CompensationMode, WorkerStatus
from ..workers.repository import WorkerRepository


class StatsService:
    """Overview numbers for the workforce dashboard card."""

    def __init__(self, workers: WorkerRepository, attendance: AttendanceService, advances: AdvanceService):
        self._workers = workers
        self._attendance = attendance
        self._advances = advances

    def overview(self, *, farm_id: int, today: date) -> dict:
        workers = list(self._workers.list_for_farm(farm_id=int(farm_id), sort="name"))
        active = [w for w in workers if w.status is WorkerStatus.ACTIVE]
        month_days = calendar.monthrange(today.year, today.month)[1]

        nominal = ZERO
        for w in active:
            if w.compensation_mode is CompensationMode.DAILY:
                nominal += w.daily_wage * month_days
            else:
                nominal += w.monthly_salary

        return {
            "total": len(workers),
            "active": len(active),
            "on_leave": sum(1 for w in workers if w.status is WorkerStatus.ON_LEAVE),
            "resigned": sum(1 for w in workers if w.status is WorkerStatus.RESIGNED),
            "present_today": self._attendance.present_on(farm_id=farm_id, work_date=today),
            "total_monthly_salary": money(nominal),
            "total_outstanding_advance": money_sum(self._advances.outstanding_balance(w.worker_id) for w in workers),
            "roles": sorted({w.role for w in workers}),
        }
