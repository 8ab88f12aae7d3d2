from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..common.datetime_utils import month_bounds, parse_time_of_day
from ..common.validators import optional_text, require_non_negative_amount
from ..core.constants import MAX_OVERTIME_HOURS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, UnknownWorkerError, ValidationError
from ..workers.repository import WorkerRepository
from .model import (
    AttendanceHistory,
    AttendanceRecord,
    AttendanceSummary,
    BulkUpsertResult,
    EntryFailure,
    RosterEntry,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceEntry:
    """One validated line of a daily sheet submission."""

    worker_id: int
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None


def parse_attendance_status(value: Any) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid attendance status {value!r}; expected one of: {allowed}")


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, workers: WorkerRepository):
        self._attendance = attendance
        self._workers = workers

    def get_daily_roster(self, *, farm_id: int, work_date: date) -> list[RosterEntry]:
        roster = [w for w in self._workers.list_for_farm(farm_id=int(farm_id), sort="name") if w.on_roster]
        existing = {r.worker_id: r for r in self._attendance.list_for_date(farm_id=int(farm_id), work_date=work_date)}

        sheet: list[RosterEntry] = []
        for worker in roster:
            rec = existing.get(worker.worker_id)
            if rec is None:
                sheet.append(RosterEntry(worker=worker, status=None, recorded=False))
                continue
            sheet.append(
                RosterEntry(
                    worker=worker,
                    status=rec.status,
                    recorded=True,
                    check_in=rec.check_in,
                    check_out=rec.check_out,
                    overtime_hours=rec.overtime_hours,
                    notes=rec.notes,
                    attendance_id=rec.attendance_id,
                )
            )
        return sheet

    def _parse_entry(self, *, farm_id: int, raw: dict) -> AttendanceEntry:
        try:
            worker_id = int(raw.get("worker_id"))
        except (TypeError, ValueError):
            raise ValidationError("worker_id is required")

        worker = self._workers.get_by_id(worker_id)
        if not worker or worker.farm_id != int(farm_id) or not worker.on_roster:
            raise UnknownWorkerError(f"Worker {worker_id} is not an active worker of this farm")

        overtime = raw.get("overtime_hours")
        return AttendanceEntry(
            worker_id=worker_id,
            status=parse_attendance_status(raw.get("status")),
            check_in=parse_time_of_day(raw.get("check_in")),
            check_out=parse_time_of_day(raw.get("check_out")),
            overtime_hours=require_non_negative_amount(overtime, "Overtime hours", maximum=MAX_OVERTIME_HOURS) if overtime not in (None, "") else Decimal("0"),
            notes=optional_text(raw.get("notes")),
        )

    def bulk_upsert(self, *, farm_id: int, work_date: date, entries: Iterable[dict]) -> BulkUpsertResult:
        """Save a daily sheet; each entry replaces the worker's record for the day.

        Entries without a status are skipped. Invalid entries are reported in
        ``failed`` and never abort the rest of the batch.
        """
        saved = 0
        skipped: list[Optional[int]] = []
        failed: list[EntryFailure] = []

        for raw in entries:
            raw = raw if isinstance(raw, dict) else {}
            if not str(raw.get("status") or "").strip():
                skipped.append(raw.get("worker_id"))
                continue
            try:
                entry = self._parse_entry(farm_id=farm_id, raw=raw)
                self._attendance.upsert(
                    worker_id=entry.worker_id,
                    work_date=work_date,
                    status=entry.status,
                    check_in=entry.check_in,
                    check_out=entry.check_out,
                    overtime_hours=entry.overtime_hours,
                    notes=entry.notes,
                )
                saved += 1
            except DomainError as e:
                logger.warning("Attendance entry rejected for %s on %s: %s", raw.get("worker_id"), work_date, e)
                failed.append(EntryFailure(worker_id=raw.get("worker_id"), reason=str(e)))
            except Exception:
                logger.exception("Attendance entry for %s on %s could not be saved", raw.get("worker_id"), work_date)
                failed.append(EntryFailure(worker_id=raw.get("worker_id"), reason="Entry could not be saved"))

        logger.info("Attendance saved for %s: %d saved, %d skipped, %d failed", work_date, saved, len(skipped), len(failed))
        return BulkUpsertResult(saved=saved, skipped=skipped, failed=failed)

    def get_history(
        self,
        *,
        worker_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AttendanceHistory:
        if not self._workers.get_by_id(int(worker_id)):
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date must not be after end date")

        records = list(self._attendance.list_for_worker(worker_id=int(worker_id), start_date=start_date, end_date=end_date))
        records.sort(key=lambda r: r.work_date)
        return AttendanceHistory(records=records, summary=AttendanceSummary.from_records(records))

    def records_for_month(self, *, worker_id: int, year_month: str) -> list[AttendanceRecord]:
        start, end = month_bounds(year_month)
        records = self._attendance.list_for_worker(worker_id=int(worker_id), start_date=start, end_date=end)
        return sorted(records, key=lambda r: r.work_date)

    def present_on(self, *, farm_id: int, work_date: date) -> int:
        return sum(1 for r in self._attendance.list_for_date(farm_id=int(farm_id), work_date=work_date) if r.status is AttendanceStatus.PRESENT)
