from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_AMOUNT
from ..core.exceptions import InvalidAmountError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()

def optional_text(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None

def to_decimal(value: Any, field_name: str, *, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise InvalidAmountError(f"{field_name} must be a number")
    if abs(amount) > maximum:
        raise InvalidAmountError(f"{field_name} cannot exceed {maximum}")
    return amount

def require_positive_amount(value: Any, field_name: str, *, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    amount = to_decimal(value, field_name, maximum=maximum)
    if amount <= 0:
        raise InvalidAmountError(f"{field_name} must be greater than 0")
    return amount

def require_non_negative_amount(value: Any, field_name: str, *, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    amount = to_decimal(value, field_name, maximum=maximum)
    if amount < 0:
        raise InvalidAmountError(f"{field_name} cannot be negative")
    return amount

def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if number <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return number
