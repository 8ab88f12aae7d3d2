from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..common.cache import TTLCache
from ..common.datetime_utils import parse_iso_date
from ..common.pagination import Pagination, paginate
from ..common.validators import require_non_empty, require_non_negative_amount
from ..core.constants import WORKER_CACHE_MAX_ENTRIES, WORKER_CACHE_TTL_SECONDS
from ..core.enums import CompensationMode, WorkerStatus
from ..core.exceptions import ConfirmationRequiredError, UnknownWorkerError, ValidationError
from .model import Worker, WorkerDraft
from .repository import WorkerRepository

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("phone", "address", "village", "emergency_contact", "bank_account", "ifsc", "notes")
_UPDATABLE_FIELDS = frozenset(
    ("name", "role", "compensation_mode", "monthly_salary", "daily_wage", "join_date", "status") + _TEXT_FIELDS
)


def parse_compensation_mode(value: Any) -> CompensationMode:
    if isinstance(value, CompensationMode):
        return value
    try:
        return CompensationMode(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Compensation mode must be 'monthly' or 'daily'")


def parse_worker_status(value: Any) -> WorkerStatus:
    if isinstance(value, WorkerStatus):
        return value
    try:
        return WorkerStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Status must be one of: active, on-leave, resigned")


def _as_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f"{field_name} is required")
    return parse_iso_date(str(value))


def _check_rates(mode: CompensationMode, monthly_salary: Decimal, daily_wage: Decimal) -> None:
    if mode is CompensationMode.MONTHLY and monthly_salary <= 0:
        raise ValidationError("Monthly salary is required for monthly workers")
    if mode is CompensationMode.DAILY and daily_wage <= 0:
        raise ValidationError("Daily wage is required for daily-wage workers")


class WorkerService:
    """Use cases of the worker directory (the reference table for payroll)."""

    def __init__(self, workers: WorkerRepository, *, cache: Optional[TTLCache] = None):
        self._workers = workers
        if cache is None:
            cache = TTLCache(max_entries=WORKER_CACHE_MAX_ENTRIES, ttl_seconds=WORKER_CACHE_TTL_SECONDS)
        self._cache = cache

    def list_workers(
        self,
        *,
        farm_id: int,
        status: Any = None,
        search: Optional[str] = None,
        role: Optional[str] = None,
        sort: str = "name",
        page: Any = 1,
        limit: Any = None,
    ) -> tuple[list[Worker], Pagination]:
        status_filter = parse_worker_status(status) if status else None
        search = (search or "").strip() or None
        role = (role or "").strip() or None

        key = (int(farm_id), status_filter, search, role, sort)
        rows = self._cache.get(key)
        if rows is None:
            rows = list(
                self._workers.list_for_farm(farm_id=int(farm_id), status=status_filter, search=search, role=role, sort=sort)
            )
            self._cache.set(key, rows)
        return paginate(rows, page=page, limit=limit)

    def get_worker(self, worker_id: int, *, farm_id: Optional[int] = None) -> Worker:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker or (farm_id is not None and worker.farm_id != int(farm_id)):
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        return worker

    def create_worker(
        self,
        *,
        farm_id: int,
        name: str,
        role: str,
        compensation_mode: Any,
        monthly_salary: Any = 0,
        daily_wage: Any = 0,
        join_date: Any = None,
        status: Any = WorkerStatus.ACTIVE,
        **contact: Any,
    ) -> Worker:
        unknown = set(contact) - set(_TEXT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown worker fields: {', '.join(sorted(unknown))}")

        mode = parse_compensation_mode(compensation_mode)
        monthly = require_non_negative_amount(monthly_salary or 0, "Monthly salary")
        daily = require_non_negative_amount(daily_wage or 0, "Daily wage")
        _check_rates(mode, monthly, daily)

        draft = WorkerDraft(
            farm_id=int(farm_id),
            name=require_non_empty(name, "Name"),
            role=require_non_empty(role, "Role"),
            compensation_mode=mode,
            monthly_salary=monthly,
            daily_wage=daily,
            join_date=_as_date(join_date, "Join date") if join_date else date.today(),
            status=parse_worker_status(status),
            **{k: str(v or "").strip() for k, v in contact.items()},
        )
        worker_id = self._workers.create(draft)
        self._cache.clear()
        logger.info("Worker added: %s (%s) id=%s farm=%s", draft.name, draft.role, worker_id, draft.farm_id)
        return self.get_worker(worker_id)

    def update_worker(self, worker_id: int, *, farm_id: Optional[int] = None, **fields: Any) -> Worker:
        worker = self.get_worker(worker_id, farm_id=farm_id)
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if name in ("name", "role"):
                changes[name] = require_non_empty(value, name.capitalize())
            elif name == "compensation_mode":
                changes[name] = parse_compensation_mode(value)
            elif name == "monthly_salary":
                changes[name] = require_non_negative_amount(value or 0, "Monthly salary")
            elif name == "daily_wage":
                changes[name] = require_non_negative_amount(value or 0, "Daily wage")
            elif name == "join_date":
                changes[name] = _as_date(value, "Join date")
            elif name == "status":
                changes[name] = parse_worker_status(value)
            else:
                changes[name] = str(value or "").strip()

        updated = replace(worker, **changes)
        _check_rates(updated.compensation_mode, updated.monthly_salary, updated.daily_wage)

        if not self._workers.update(updated):
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        self._cache.clear()
        return self.get_worker(worker_id)

    def set_status(self, worker_id: int, status: Any, *, farm_id: Optional[int] = None) -> Worker:
        return self.update_worker(worker_id, farm_id=farm_id, status=status)

    def delete_worker(self, worker_id: int, *, confirm: bool = False, farm_id: Optional[int] = None) -> None:
        """Delete a worker with all attendance, advance and payment history."""
        worker = self.get_worker(worker_id, farm_id=farm_id)
        if not confirm:
            raise ConfirmationRequiredError(
                f"Deleting {worker.name} removes all attendance, advance and salary history; confirm to proceed"
            )
        if not self._workers.delete_cascade(worker.worker_id):
            raise UnknownWorkerError(f"Worker {worker_id} not found")
        self._cache.clear()
        logger.info("Worker deleted: %s (%s) id=%s", worker.name, worker.role, worker.worker_id)
