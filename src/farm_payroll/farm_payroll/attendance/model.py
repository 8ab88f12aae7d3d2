from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Optional

from ..core.enums import AttendanceStatus
from ..workers.model import Worker


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance on one calendar day."""

    attendance_id: int
    worker_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class RosterEntry:
    """Read-model row of the daily sheet."""

    worker: Worker
    status: Optional[AttendanceStatus]
    recorded: bool
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None
    attendance_id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    half_day: int = 0
    leave: int = 0
    holiday: int = 0
    total_overtime: Decimal = Decimal("0")
    days_worked: Decimal = Decimal("0")

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceSummary":
        counts = {status: 0 for status in AttendanceStatus}
        overtime = Decimal("0")
        days = Decimal("0")
        for r in records:
            counts[r.status] += 1
            overtime += r.overtime_hours or Decimal("0")
            days += r.status.weight
        return cls(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            half_day=counts[AttendanceStatus.HALF_DAY],
            leave=counts[AttendanceStatus.LEAVE],
            holiday=counts[AttendanceStatus.HOLIDAY],
            total_overtime=overtime,
            days_worked=days,
        )


@dataclass(frozen=True)
class AttendanceHistory:
    records: list[AttendanceRecord]
    summary: AttendanceSummary


@dataclass(frozen=True)
class EntryFailure:
    worker_id: Optional[int]
    reason: str


@dataclass(frozen=True)
class BulkUpsertResult:
    saved: int
    skipped: list[Optional[int]] = field(default_factory=list)
    failed: list[EntryFailure] = field(default_factory=list)
