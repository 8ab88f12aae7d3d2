from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import WorkerStatus
from .model import Worker, WorkerDraft


class WorkerRepository(Protocol):
    """Repository interface for the worker directory.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def list_for_farm(
        self,
        *,
        farm_id: int,
        status: Optional[WorkerStatus] = None,
        search: Optional[str] = None,
        role: Optional[str] = None,
        sort: str = "name",
    ) -> Sequence[Worker]:
        raise NotImplementedError

    def create(self, draft: WorkerDraft) -> int:
        raise NotImplementedError

    def update(self, worker: Worker) -> bool:
        """Persist every mutable field of ``worker``."""

        raise NotImplementedError

    def delete_cascade(self, worker_id: int) -> bool:
        """Delete the worker with its attendance, advances and payments atomically."""

        raise NotImplementedError
