from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total else 0

    def to_dict(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def clamp_page(page, limit) -> tuple[int, int]:
    try:
        p = max(1, int(page or 1))
    except (TypeError, ValueError):
        p = 1
    try:
        size = min(MAX_PAGE_SIZE, max(1, int(limit or DEFAULT_PAGE_SIZE)))
    except (TypeError, ValueError):
        size = DEFAULT_PAGE_SIZE
    return p, size


def paginate(items: Sequence[T], *, page, limit) -> tuple[list[T], Pagination]:
    p, size = clamp_page(page, limit)
    start = (p - 1) * size
    return list(items[start : start + size]), Pagination(page=p, limit=size, total=len(items))
