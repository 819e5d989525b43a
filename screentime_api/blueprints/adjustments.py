# screentime_api/blueprints/adjustments.py
from __future__ import annotations

from flask import Blueprint, request

from screentime_api.common.errors import NotFoundError, ValidationError
from screentime_api.common.http import ok
from screentime_api.common.parsing import effective_limit, json_body, parse_datetime, parse_int
from screentime_api.services import store
from screentime_api.services.store import AdjustmentQueryFilter

bp = Blueprint("adjustments", __name__, url_prefix="/adjustments")


@bp.get("")
def list_adjustments():
    """?limit=&type=&since= ; newest first, 10 rows unless `limit` says otherwise."""
    flt = AdjustmentQueryFilter.from_args(request.args)
    rows = store.get_adjustments(flt)
    return ok([a.to_dict() for a in rows], count=len(rows), limit=effective_limit(flt.limit))


@bp.get("/<int:aid>")
def get_adjustment(aid: int):
    a = store.get_adjustment(aid)
    if not a:
        raise NotFoundError(f"Adjustment with ID {aid} not found")
    return ok(a.to_dict())


@bp.post("")
def create_adjustment():
    data = json_body()

    raw_type = data.get("type", data.get("adjustment_type_id"))
    if raw_type is None:
        raise ValidationError("type is required")
    atid = parse_int(raw_type, "type", lo=1)
    created = parse_datetime(data.get("created"), "created")
    comment = data.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise ValidationError("comment must be a string")

    at = store.get_adjustment_type(atid)
    if not at:
        raise NotFoundError(f"Adjustment type with ID {atid} not found")

    a = store.add_adjustment(at, comment=comment, created=created)
    return ok(a.to_dict(), 201)


@bp.delete("/<int:aid>")
def delete_adjustment(aid: int):
    deleted = store.delete_adjustment(aid)
    return ok({"deleted": deleted})
