from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.constants import DEFAULT_FARM_ID
from ..core.exceptions import BusinessRuleError, DomainError, NotFoundError, ValidationError
from .pagination import Pagination

logger = logging.getLogger(__name__)


def jsonable(value: Any) -> Any:
    """Convert dataclasses, enums, decimals and dates into JSON primitives."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, dict):
        return {k: jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def ok(data: Any = None, *, status: int = 200, pagination: Optional[Pagination] = None, **extra):
    body = {"success": True, "data": jsonable(data)}
    if pagination is not None:
        body["pagination"] = pagination.to_dict()
    body.update({k: jsonable(v) for k, v in extra.items()})
    return jsonify(body), status


def fail(message: str, *, status: int, code: str):
    return jsonify({"success": False, "message": message, "code": code}), status


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, BusinessRuleError):
        return 409
    return 400


def json_endpoint(view):
    """Render domain errors as the JSON error envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), status=status_for(e), code=e.code)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return fail("Something went wrong, please try again", status=500, code="SERVER_ERROR")

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_farm_id(default: int = DEFAULT_FARM_ID) -> int:
    raw = request.headers.get("X-Farm-Id", "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("X-Farm-Id header is invalid")
