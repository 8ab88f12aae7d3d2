from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import PaymentEvent
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, worker_id, pay_month, paid_amount, method, deductions, deduction_notes,
    advance_deducted, bonus, bonus_notes, notes, reference, reverses_payment_id, paid_at
"""


def _row_to_event(r: dict) -> PaymentEvent:
    reverses = r.get("reverses_payment_id")
    return PaymentEvent(
        payment_id=int(r["payment_id"]),
        worker_id=int(r["worker_id"]),
        year_month=r["pay_month"],
        paid_amount=as_decimal(r["paid_amount"]),
        method=PaymentMethod(r["method"]),
        deductions=as_decimal(r.get("deductions")),
        advance_deducted=as_decimal(r.get("advance_deducted")),
        bonus=as_decimal(r.get("bonus")),
        paid_at=r["paid_at"],
        deduction_notes=r.get("deduction_notes"),
        bonus_notes=r.get("bonus_notes"),
        notes=r.get("notes"),
        reference=r.get("reference"),
        reverses_payment_id=int(reverses) if reverses is not None else None,
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        deduction_notes: Optional[str] = None,
        bonus_notes: Optional[str] = None,
        notes: Optional[str] = None,
        reference: Optional[str] = None,
        reverses_payment_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_payments(
                    worker_id, pay_month, paid_amount, method, deductions, deduction_notes,
                    advance_deducted, bonus, bonus_notes, notes, reference, reverses_payment_id, paid_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(worker_id),
                    year_month,
                    paid_amount,
                    method.value,
                    deductions,
                    deduction_notes,
                    advance_deducted,
                    bonus,
                    bonus_notes,
                    notes,
                    reference,
                    reverses_payment_id,
                    paid_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payment_id: int) -> Optional[PaymentEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_payments WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def list_for_worker(self, worker_id: int, *, year_month: Optional[str] = None) -> Sequence[PaymentEvent]:
        clauses = ["worker_id=%s"]
        params: list[object] = [int(worker_id)]
        if year_month is not None:
            clauses.append("pay_month=%s")
            params.append(year_month)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_payments WHERE {where} ORDER BY payment_id ASC",
                tuple(params),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def find_by_reference(self, *, worker_id: int, reference: str) -> Optional[PaymentEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_payments WHERE worker_id=%s AND reference=%s",
                (int(worker_id), reference),
            )
            r = fetchone(cur)
            return _row_to_event(r) if r else None
