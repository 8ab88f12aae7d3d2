from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.repository import AdvanceRepository
from .advances.service import AdvanceService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.cache import TTLCache
from .common.datetime_utils import now_local
from .core.constants import WORKER_CACHE_MAX_ENTRIES, WORKER_CACHE_TTL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollService
from .stats.service import StatsService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    workers_repo: WorkerRepository
    attendance_repo: AttendanceRepository
    advances_repo: AdvanceRepository
    payments_repo: PaymentRepository

    worker_service: WorkerService
    attendance_service: AttendanceService
    advance_service: AdvanceService
    payroll_service: PayrollService
    payment_service: PaymentService
    stats_service: StatsService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    workers_repo: WorkerRepository,
    attendance_repo: AttendanceRepository,
    advances_repo: AdvanceRepository,
    payments_repo: PaymentRepository,
    conn: Optional[DatabaseConnection] = None,
    include_overtime: bool = False,
    cache_ttl_seconds: float = WORKER_CACHE_TTL_SECONDS,
    cache_max_entries: int = WORKER_CACHE_MAX_ENTRIES,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build the services on top of any repository implementations."""
    worker_service = WorkerService(
        workers_repo,
        cache=TTLCache(max_entries=cache_max_entries, ttl_seconds=cache_ttl_seconds),
    )
    attendance_service = AttendanceService(attendance_repo, workers_repo)
    advance_service = AdvanceService(advances_repo, payments_repo, workers_repo)
    payroll_service = PayrollService(
        workers_repo,
        attendance_service,
        payments_repo,
        calculator=StandardPayrollCalculator(include_overtime=include_overtime),
    )
    payment_service = PaymentService(payments_repo, workers_repo, payroll_service, advance_service, clock=clock)
    stats_service = StatsService(workers_repo, attendance_service, advance_service)

    return Container(
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        advances_repo=advances_repo,
        payments_repo=payments_repo,
        worker_service=worker_service,
        attendance_service=attendance_service,
        advance_service=advance_service,
        payroll_service=payroll_service,
        payment_service=payment_service,
        stats_service=stats_service,
        conn=conn,
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        workers_repo=MySQLWorkerRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        advances_repo=MySQLAdvanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        conn=conn,
        include_overtime=bool(getattr(settings, "OVERTIME_PAY_ENABLED", False)),
        cache_ttl_seconds=float(getattr(settings, "WORKER_CACHE_TTL_SECONDS", WORKER_CACHE_TTL_SECONDS)),
        cache_max_entries=int(getattr(settings, "WORKER_CACHE_MAX_ENTRIES", WORKER_CACHE_MAX_ENTRIES)),
    )
