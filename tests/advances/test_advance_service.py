from datetime import date
from decimal import Decimal

import pytest

from src.farm_payroll.farm_payroll.core.enums import WorkerStatus
from src.farm_payroll.farm_payroll.core.exceptions import InvalidAmountError, UnknownWorkerError


def test_payment_recovers_advance(container, add_worker):
    worker = add_worker("Asha", mode="monthly", rate="12000")

    container.advance_service.record_advance(worker_id=worker.worker_id, amount=1000, notes="seed money")
    container.payment_service.record_payment(
        worker_id=worker.worker_id, year_month="2026-02", paid_amount=5000, advance_deducted=400
    )

    assert container.advance_service.outstanding_balance(worker.worker_id) == Decimal("600.00")
    statement = container.advance_service.statement(worker.worker_id)
    assert statement.total_advanced == Decimal("1000.00")
    assert statement.total_recovered == Decimal("400.00")
    assert statement.outstanding == Decimal("600.00")


@pytest.mark.parametrize("amount", [0, -50, "abc", None, "1e30", "10000000000", "NaN"])
def test_record_advance_rejects_bad_amounts(container, add_worker, amount):
    worker = add_worker("Asha")
    with pytest.raises(InvalidAmountError):
        container.advance_service.record_advance(worker_id=worker.worker_id, amount=amount)


def test_record_advance_requires_roster_worker(container, add_worker):
    gone = add_worker("Chandu", status=WorkerStatus.RESIGNED)
    on_leave = add_worker("Dev", status=WorkerStatus.ON_LEAVE)

    with pytest.raises(UnknownWorkerError):
        container.advance_service.record_advance(worker_id=999, amount=100)
    with pytest.raises(UnknownWorkerError):
        container.advance_service.record_advance(worker_id=gone.worker_id, amount=100)

    advance = container.advance_service.record_advance(
        worker_id=on_leave.worker_id, amount="250.5", advance_date=date(2026, 2, 2)
    )
    assert advance.amount == Decimal("250.50")
    assert advance.advance_date == date(2026, 2, 2)


def test_list_advances_is_chronological(container, add_worker):
    worker = add_worker("Asha")
    container.advance_service.record_advance(worker_id=worker.worker_id, amount=300, advance_date=date(2026, 2, 9))
    container.advance_service.record_advance(worker_id=worker.worker_id, amount=100, advance_date=date(2026, 1, 4))

    rows = container.advance_service.list_advances(worker.worker_id)
    assert [a.amount for a in rows] == [Decimal("100.00"), Decimal("300.00")]
