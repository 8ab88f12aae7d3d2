from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from src.farm_payroll.farm_payroll.advances.model import AdvancePayment
from src.farm_payroll.farm_payroll.attendance.model import AttendanceRecord
from src.farm_payroll.farm_payroll.container import wire
from src.farm_payroll.farm_payroll.core.enums import AttendanceStatus, CompensationMode, PaymentMethod, WorkerStatus
from src.farm_payroll.farm_payroll.payments.model import PaymentEvent
from src.farm_payroll.farm_payroll.workers.model import Worker, WorkerDraft


class InMemoryAttendance:
    def __init__(self, workers: "InMemoryWorkers"):
        self._workers = workers
        self.by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def list_for_date(self, *, farm_id: int, work_date: date):
        rows = []
        for (worker_id, d), rec in self.by_key.items():
            worker = self._workers.get_by_id(worker_id)
            if d == work_date and worker and worker.farm_id == farm_id:
                rows.append(rec)
        return sorted(rows, key=lambda r: r.worker_id)

    def list_for_worker(self, *, worker_id: int, start_date=None, end_date=None):
        rows = [
            r
            for (w, d), r in self.by_key.items()
            if w == worker_id and (start_date is None or d >= start_date) and (end_date is None or d <= end_date)
        ]
        return sorted(rows, key=lambda r: r.work_date)

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
        existing = self.by_key.get((worker_id, work_date))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        self.by_key[(worker_id, work_date)] = AttendanceRecord(
            attendance_id=attendance_id,
            worker_id=worker_id,
            work_date=work_date,
            status=status,
            check_in=check_in,
            check_out=check_out,
            overtime_hours=Decimal(overtime_hours),
            notes=notes,
        )
        return attendance_id


class InMemoryAdvances:
    def __init__(self):
        self.rows: dict[int, AdvancePayment] = {}

    def create(self, *, worker_id: int, amount: Decimal, advance_date: date, notes: Optional[str] = None) -> int:
        advance_id = len(self.rows) + 1
        self.rows[advance_id] = AdvancePayment(
            advance_id=advance_id, worker_id=worker_id, amount=amount, advance_date=advance_date, notes=notes
        )
        return advance_id

    def get_by_id(self, advance_id: int) -> Optional[AdvancePayment]:
        return self.rows.get(advance_id)

    def list_for_worker(self, worker_id: int):
        return [a for a in self.rows.values() if a.worker_id == worker_id]


class InMemoryPayments:
    def __init__(self):
        self.rows: dict[int, PaymentEvent] = {}

    def create(
        self,
        *,
        worker_id: int,
        year_month: str,
        paid_amount: Decimal,
        method: PaymentMethod,
        deductions: Decimal,
        advance_deducted: Decimal,
        bonus: Decimal,
        paid_at: datetime,
        deduction_notes=None,
        bonus_notes=None,
        notes=None,
        reference=None,
        reverses_payment_id=None,
    ) -> int:
        payment_id = len(self.rows) + 1
        self.rows[payment_id] = PaymentEvent(
            payment_id=payment_id,
            worker_id=worker_id,
            year_month=year_month,
            paid_amount=paid_amount,
            method=method,
            deductions=deductions,
            advance_deducted=advance_deducted,
            bonus=bonus,
            paid_at=paid_at,
            deduction_notes=deduction_notes,
            bonus_notes=bonus_notes,
            notes=notes,
            reference=reference,
            reverses_payment_id=reverses_payment_id,
        )
        return payment_id

    def get_by_id(self, payment_id: int) -> Optional[PaymentEvent]:
        return self.rows.get(payment_id)

    def list_for_worker(self, worker_id: int, *, year_month: Optional[str] = None):
        rows = [
            p for p in self.rows.values() if p.worker_id == worker_id and (year_month is None or p.year_month == year_month)
        ]
        return sorted(rows, key=lambda p: p.payment_id)

    def find_by_reference(self, *, worker_id: int, reference: str) -> Optional[PaymentEvent]:
        for p in self.rows.values():
            if p.worker_id == worker_id and p.reference == reference:
                return p
        return None


class InMemoryWorkers:
    def __init__(self):
        self.rows: dict[int, Worker] = {}
        self.list_calls = 0
        self.ledgers: list = []

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self.rows.get(worker_id)

    def list_for_farm(self, *, farm_id: int, status=None, search=None, role=None, sort: str = "name"):
        self.list_calls += 1
        rows = [w for w in self.rows.values() if w.farm_id == farm_id]
        if status is not None:
            rows = [w for w in rows if w.status is status]
        if role:
            rows = [w for w in rows if role.lower() in w.role.lower()]
        if search:
            needle = search.lower()
            rows = [w for w in rows if any(needle in f.lower() for f in (w.name, w.phone, w.role, w.village))]
        if sort == "recent":
            rows.sort(key=lambda w: w.worker_id, reverse=True)
        elif sort == "salary":
            rows.sort(key=lambda w: (w.monthly_salary, w.daily_wage), reverse=True)
        else:
            rows.sort(key=lambda w: w.name)
        return rows

    def create(self, draft: WorkerDraft) -> int:
        worker_id = len(self.rows) + 1
        while worker_id in self.rows:
            worker_id += 1
        self.rows[worker_id] = Worker(worker_id=worker_id, **vars(draft))
        return worker_id

    def update(self, worker: Worker) -> bool:
        if worker.worker_id not in self.rows:
            return False
        self.rows[worker.worker_id] = worker
        return True

    def delete_cascade(self, worker_id: int) -> bool:
        if worker_id not in self.rows:
            return False
        attendance, advances, payments = self.ledgers
        for key in [k for k in attendance.by_key if k[0] == worker_id]:
            del attendance.by_key[key]
        for key in [k for k, a in advances.rows.items() if a.worker_id == worker_id]:
            del advances.rows[key]
        for key in [k for k, p in payments.rows.items() if p.worker_id == worker_id]:
            del payments.rows[key]
        del self.rows[worker_id]
        return True


class FixedClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(minutes=1)
        return self.now


@pytest.fixture
def workers_repo():
    return InMemoryWorkers()


@pytest.fixture
def attendance_repo(workers_repo):
    return InMemoryAttendance(workers_repo)


@pytest.fixture
def advances_repo():
    return InMemoryAdvances()


@pytest.fixture
def payments_repo():
    return InMemoryPayments()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 1, 9, 0))


@pytest.fixture
def container(workers_repo, attendance_repo, advances_repo, payments_repo, clock):
    workers_repo.ledgers = [attendance_repo, advances_repo, payments_repo]
    return wire(
        workers_repo=workers_repo,
        attendance_repo=attendance_repo,
        advances_repo=advances_repo,
        payments_repo=payments_repo,
        clock=clock,
    )


@pytest.fixture
def add_worker(workers_repo):
    """Insert a worker straight into the fake directory."""

    def _add(name: str = "Ramesh", *, mode: str = "daily", rate: str = "500", farm_id: int = 1, **kwargs) -> Worker:
        draft = WorkerDraft(
            farm_id=farm_id,
            name=name,
            role=kwargs.pop("role", "Field hand"),
            compensation_mode=CompensationMode(mode),
            monthly_salary=Decimal(rate) if mode == "monthly" else Decimal("0"),
            daily_wage=Decimal(rate) if mode == "daily" else Decimal("0"),
            join_date=kwargs.pop("join_date", date(2025, 1, 1)),
            status=kwargs.pop("status", WorkerStatus.ACTIVE),
            **kwargs,
        )
        return workers_repo.get_by_id(workers_repo.create(draft))

    return _add
