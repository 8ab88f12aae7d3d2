from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import UnknownPeriodError, ValidationError

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM (or HH:MM:SS); blank means not recorded."""
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def parse_year_month(value: str) -> tuple[int, int]:
    m = _YEAR_MONTH_RE.match((value or "").strip())
    if not m:
        raise UnknownPeriodError(f"Invalid month {value!r}, expected YYYY-MM")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise UnknownPeriodError(f"Invalid month {value!r}, expected YYYY-MM")
    return year, month


def format_year_month(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def days_in_month(year_month: str) -> int:
    year, month = parse_year_month(year_month)
    return calendar.monthrange(year, month)[1]


def month_bounds(year_month: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    year, month = parse_year_month(year_month)
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
