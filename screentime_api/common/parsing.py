# screentime_api/common/parsing.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import request

from .errors import ValidationError

DEFAULT_LIMIT = 10
# limits are an unsigned 8-bit quantity
MAX_LIMIT = 255


def parse_int(value, field: str, lo: int | None = None, hi: int | None = None) -> int:
    """Coerce `value` to int, rejecting bools, floats with a fraction and out-of-range values."""
    if isinstance(value, bool) or value is None or value == "":
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field} must be an integer")
        value = int(value)
    try:
        out = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
    if lo is not None and out < lo:
        raise ValidationError(f"{field} must be >= {lo}")
    if hi is not None and out > hi:
        raise ValidationError(f"{field} must be <= {hi}")
    return out


def parse_limit(value) -> Optional[int]:
    """None/empty means "use the default"; anything else must fit 0..255."""
    if value is None or value == "":
        return None
    return parse_int(value, "limit", 0, MAX_LIMIT)


def effective_limit(limit: Optional[int]) -> int:
    return DEFAULT_LIMIT if limit is None else limit


def parse_datetime(value, field: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp. Aware values are converted to naive UTC,
    matching what the store keeps.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"{field} must be an ISO 8601 timestamp")
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def json_body() -> dict:
    """The request's JSON object, or {} for an empty body."""
    data = request.get_json(silent=True, force=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data
