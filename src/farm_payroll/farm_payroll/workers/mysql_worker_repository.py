from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CompensationMode, WorkerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Worker, WorkerDraft
from .repository import WorkerRepository

_COLUMNS = """
    worker_id, farm_id, name, role, compensation_mode, monthly_salary, daily_wage,
    join_date, status, phone, address, village, emergency_contact, bank_account,
    ifsc, notes, created_at
"""

_SORTS = {
    "name": "name ASC",
    "recent": "created_at DESC, worker_id DESC",
    "salary": "monthly_salary DESC, daily_wage DESC",
}


def _row_to_worker(r: dict) -> Worker:
    return Worker(
        worker_id=int(r["worker_id"]),
        farm_id=int(r["farm_id"]),
        name=r["name"],
        role=r["role"],
        compensation_mode=CompensationMode(r["compensation_mode"]),
        monthly_salary=as_decimal(r.get("monthly_salary")),
        daily_wage=as_decimal(r.get("daily_wage")),
        join_date=r["join_date"],
        status=WorkerStatus(r["status"]),
        phone=r.get("phone") or "",
        address=r.get("address") or "",
        village=r.get("village") or "",
        emergency_contact=r.get("emergency_contact") or "",
        bank_account=r.get("bank_account") or "",
        ifsc=r.get("ifsc") or "",
        notes=r.get("notes") or "",
        created_at=r.get("created_at"),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (int(worker_id),))
            r = fetchone(cur)
            return _row_to_worker(r) if r else None

    def list_for_farm(
        self,
        *,
        farm_id: int,
        status: Optional[WorkerStatus] = None,
        search: Optional[str] = None,
        role: Optional[str] = None,
        sort: str = "name",
    ) -> Sequence[Worker]:
        clauses = ["farm_id=%s"]
        params: list[object] = [int(farm_id)]

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if role:
            clauses.append("role LIKE %s")
            params.append(f"%{role}%")
        if search:
            like = f"%{search}%"
            clauses.append("(name LIKE %s OR phone LIKE %s OR role LIKE %s OR village LIKE %s)")
            params.extend([like, like, like, like])

        where = " AND ".join(clauses)
        order_by = _SORTS.get(sort, _SORTS["name"])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE {where} ORDER BY {order_by}", tuple(params))
            return [_row_to_worker(r) for r in fetchall(cur)]

    def create(self, draft: WorkerDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(
                    farm_id, name, role, compensation_mode, monthly_salary, daily_wage, join_date,
                    status, phone, address, village, emergency_contact, bank_account, ifsc, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(draft.farm_id),
                    draft.name,
                    draft.role,
                    draft.compensation_mode.value,
                    draft.monthly_salary,
                    draft.daily_wage,
                    draft.join_date,
                    draft.status.value,
                    draft.phone,
                    draft.address,
                    draft.village,
                    draft.emergency_contact,
                    draft.bank_account,
                    draft.ifsc,
                    draft.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, worker: Worker) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE workers
                SET name=%s, role=%s, compensation_mode=%s, monthly_salary=%s, daily_wage=%s,
                    join_date=%s, status=%s, phone=%s, address=%s, village=%s,
                    emergency_contact=%s, bank_account=%s, ifsc=%s, notes=%s
                WHERE worker_id=%s
                """,
                (
                    worker.name,
                    worker.role,
                    worker.compensation_mode.value,
                    worker.monthly_salary,
                    worker.daily_wage,
                    worker.join_date,
                    worker.status.value,
                    worker.phone,
                    worker.address,
                    worker.village,
                    worker.emergency_contact,
                    worker.bank_account,
                    worker.ifsc,
                    worker.notes,
                    int(worker.worker_id),
                ),
            )
            # rowcount is 0 when nothing changed, so confirm existence instead.
            cur.execute("SELECT 1 AS found FROM workers WHERE worker_id=%s", (int(worker.worker_id),))
            return fetchone(cur) is not None

    def delete_cascade(self, worker_id: int) -> bool:
        # Single db_cursor block: all four deletes commit or roll back together.
        with db_cursor(self._conn_factory) as (_, cur):
            wid = int(worker_id)
            cur.execute("DELETE FROM attendance_records WHERE worker_id=%s", (wid,))
            cur.execute("DELETE FROM advance_payments WHERE worker_id=%s", (wid,))
            cur.execute("DELETE FROM salary_payments WHERE worker_id=%s", (wid,))
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (wid,))
            return cur.rowcount > 0
