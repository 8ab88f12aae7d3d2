from __future__ import annotations

from decimal import Decimal
from enum import Enum


class CompensationMode(str, Enum):
    """How a worker's base pay is derived."""

    MONTHLY = "monthly"
    DAILY = "daily"


class WorkerStatus(str, Enum):
    """Lifecycle status of a worker in the directory."""

    ACTIVE = "active"
    ON_LEAVE = "on-leave"
    RESIGNED = "resigned"

    @property
    def on_roster(self) -> bool:
        return self is not WorkerStatus.RESIGNED


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the ledger."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    LEAVE = "leave"
    HOLIDAY = "holiday"

    @property
    def weight(self) -> Decimal:
        """Fraction of a paid working day this status counts for."""
        return _ATTENDANCE_WEIGHTS[self]


_ATTENDANCE_WEIGHTS = {
    AttendanceStatus.PRESENT: Decimal("1.0"),
    AttendanceStatus.HALF_DAY: Decimal("0.5"),
    AttendanceStatus.ABSENT: Decimal("0.0"),
    AttendanceStatus.LEAVE: Decimal("0.0"),
    AttendanceStatus.HOLIDAY: Decimal("0.0"),
}


class PaymentMethod(str, Enum):
    CASH = "cash"
    UPI = "upi"
    BANK = "bank"
    OTHER = "other"


class SalaryStatus(str, Enum):
    """Settlement state of a monthly salary snapshot."""

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
