from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_date(self, *, farm_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_worker(
        self,
        *,
        worker_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of one worker, oldest first, bounds inclusive."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        worker_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        overtime_hours: Decimal = Decimal("0"),
        notes: Optional[str] = None,
    ) -> int:
        """Create or replace the record for (worker_id, work_date).

        Returns attendance_id.
        """

        raise NotImplementedError
