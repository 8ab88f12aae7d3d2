from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import AdvancePayment
from .repository import AdvanceRepository


def _row_to_advance(r: dict) -> AdvancePayment:
    return AdvancePayment(
        advance_id=int(r["advance_id"]),
        worker_id=int(r["worker_id"]),
        amount=as_decimal(r["amount"]),
        advance_date=r["advance_date"],
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, worker_id: int, amount: Decimal, advance_date: date, notes: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO advance_payments(worker_id, amount, advance_date, notes)
                VALUES(%s,%s,%s,%s)
                """,
                (int(worker_id), amount, advance_date, notes),
            )
            return int(cur.lastrowid)

    def get_by_id(self, advance_id: int) -> Optional[AdvancePayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, worker_id, amount, advance_date, notes, created_at
                FROM advance_payments
                WHERE advance_id=%s
                """,
                (int(advance_id),),
            )
            r = fetchone(cur)
            return _row_to_advance(r) if r else None

    def list_for_worker(self, worker_id: int) -> Sequence[AdvancePayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, worker_id, amount, advance_date, notes, created_at
                FROM advance_payments
                WHERE worker_id=%s
                ORDER BY advance_date ASC, advance_id ASC
                """,
                (int(worker_id),),
            )
            return [_row_to_advance(r) for r in fetchall(cur)]
