from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "ar.attendance_id, ar.worker_id, ar.work_date, ar.status, ar.check_in, ar.check_out, ar.overtime_hours, ar.notes, ar.updated_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        overtime_hours=as_decimal(r.get("overtime_hours")),
        notes=r.get("notes"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, *, farm_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                JOIN workers w ON w.worker_id = ar.worker_id
                WHERE w.farm_id=%s AND ar.work_date=%s
                ORDER BY ar.worker_id ASC
                """,
                (int(farm_id), work_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_worker(
        self,
        *,
        worker_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.worker_id=%s"]
        params: list[object] = [int(worker_id)]
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE {where}
                ORDER BY ar.work_date ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(worker_id, work_date, status, check_in, check_out, overtime_hours, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    overtime_hours=VALUES(overtime_hours),
                    notes=VALUES(notes)
                """,
                (int(worker_id), work_date, status.value, check_in, check_out, overtime_hours, notes),
            )

            # If it was an update, lastrowid can be 0; fetch attendance_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE worker_id=%s AND work_date=%s",
                (int(worker_id), work_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0
