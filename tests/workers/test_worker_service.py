from datetime import date
from decimal import Decimal

import pytest

from src.farm_payroll.farm_payroll.common.cache import TTLCache
from src.farm_payroll.farm_payroll.core.enums import AttendanceStatus, CompensationMode, WorkerStatus
from src.farm_payroll.farm_payroll.core.exceptions import (
    ConfirmationRequiredError,
    InvalidAmountError,
    UnknownWorkerError,
    ValidationError,
)
from src.farm_payroll.farm_payroll.workers.service import WorkerService


def test_create_worker_requires_rate_of_its_mode(container):
    with pytest.raises(ValidationError):
        container.worker_service.create_worker(
            farm_id=1, name="Sita", role="Milker", compensation_mode="monthly", daily_wage=300
        )

    worker = container.worker_service.create_worker(
        farm_id=1,
        name="  Sita ",
        role="Milker",
        compensation_mode="monthly",
        monthly_salary="9000",
        join_date="2026-01-05",
        village="Rampur",
    )
    assert worker.name == "Sita"
    assert worker.compensation_mode is CompensationMode.MONTHLY
    assert worker.monthly_salary == Decimal("9000")
    assert worker.join_date == date(2026, 1, 5)
    assert worker.village == "Rampur"
    assert worker.status is WorkerStatus.ACTIVE


def test_create_worker_rejects_negative_rate_and_unknown_fields(container):
    with pytest.raises(InvalidAmountError):
        container.worker_service.create_worker(
            farm_id=1, name="A", role="B", compensation_mode="daily", daily_wage="-5"
        )
    with pytest.raises(ValidationError):
        container.worker_service.create_worker(
            farm_id=1, name="A", role="B", compensation_mode="daily", daily_wage=300, salary_grade="x"
        )


def test_update_worker_validates_resulting_rate(container, add_worker):
    worker = add_worker("Gopal", mode="daily", rate="450")

    with pytest.raises(ValidationError):
        container.worker_service.update_worker(worker.worker_id, compensation_mode="monthly")

    updated = container.worker_service.update_worker(
        worker.worker_id, compensation_mode="monthly", monthly_salary=11000, phone="98765"
    )
    assert updated.compensation_mode is CompensationMode.MONTHLY
    assert updated.rate == Decimal("11000")
    assert updated.phone == "98765"


def test_get_worker_is_scoped_to_farm(container, add_worker):
    worker = add_worker("Gopal", farm_id=2)

    assert container.worker_service.get_worker(worker.worker_id).name == "Gopal"
    with pytest.raises(UnknownWorkerError):
        container.worker_service.get_worker(worker.worker_id, farm_id=1)
    with pytest.raises(UnknownWorkerError):
        container.worker_service.get_worker(999)


def test_list_workers_filters_and_paginates(container, add_worker):
    add_worker("Asha", village="Rampur")
    add_worker("Bhola", role="Tractor driver")
    add_worker("Chandu", status=WorkerStatus.RESIGNED)
    add_worker("Dev", farm_id=2)

    rows, page = container.worker_service.list_workers(farm_id=1)
    assert [w.name for w in rows] == ["Asha", "Bhola", "Chandu"]
    assert page.total == 3

    rows, _ = container.worker_service.list_workers(farm_id=1, search="rampur")
    assert [w.name for w in rows] == ["Asha"]

    rows, _ = container.worker_service.list_workers(farm_id=1, role="driver")
    assert [w.name for w in rows] == ["Bhola"]

    rows, _ = container.worker_service.list_workers(farm_id=1, status="resigned")
    assert [w.name for w in rows] == ["Chandu"]

    rows, page = container.worker_service.list_workers(farm_id=1, page=2, limit=2)
    assert [w.name for w in rows] == ["Chandu"]
    assert page.pages == 2


def test_list_workers_is_cached_until_a_mutation(workers_repo, add_worker):
    add_worker("Asha")
    service = WorkerService(workers_repo, cache=TTLCache(max_entries=10, ttl_seconds=60))

    service.list_workers(farm_id=1)
    service.list_workers(farm_id=1)
    assert workers_repo.list_calls == 1

    service.create_worker(farm_id=1, name="Bina", role="Picker", compensation_mode="daily", daily_wage=300)
    rows, _ = service.list_workers(farm_id=1)
    assert workers_repo.list_calls == 2
    assert [w.name for w in rows] == ["Asha", "Bina"]


def test_set_status(container, add_worker):
    worker = add_worker("Asha")

    assert container.worker_service.set_status(worker.worker_id, "on-leave").status is WorkerStatus.ON_LEAVE
    with pytest.raises(ValidationError):
        container.worker_service.set_status(worker.worker_id, "retired")


def test_delete_requires_confirmation_and_cascades(container, add_worker, attendance_repo, advances_repo, payments_repo):
    worker = add_worker("Asha", rate="500")
    other = add_worker("Bina", rate="400")
    container.attendance_service.bulk_upsert(
        farm_id=1,
        work_date=date(2026, 2, 3),
        entries=[
            {"worker_id": worker.worker_id, "status": "present"},
            {"worker_id": other.worker_id, "status": AttendanceStatus.PRESENT.value},
        ],
    )
    container.advance_service.record_advance(worker_id=worker.worker_id, amount=200)
    container.payment_service.record_payment(worker_id=worker.worker_id, year_month="2026-02", paid_amount=100)

    with pytest.raises(ConfirmationRequiredError):
        container.worker_service.delete_worker(worker.worker_id)
    assert container.worker_service.get_worker(worker.worker_id)

    container.worker_service.delete_worker(worker.worker_id, confirm=True)

    with pytest.raises(UnknownWorkerError):
        container.worker_service.get_worker(worker.worker_id)
    assert all(k[0] != worker.worker_id for k in attendance_repo.by_key)
    assert len(attendance_repo.by_key) == 1
    assert advances_repo.list_for_worker(worker.worker_id) == []
    assert payments_repo.list_for_worker(worker.worker_id) == []
