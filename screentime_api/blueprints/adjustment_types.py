# screentime_api/blueprints/adjustment_types.py
from __future__ import annotations

from flask import Blueprint, request

from screentime_api.common.errors import NotFoundError
from screentime_api.common.http import ok
from screentime_api.common.parsing import effective_limit, json_body, parse_limit
from screentime_api.services import store

bp = Blueprint("adjustment_types", __name__, url_prefix="/adjustment-types")


@bp.get("")
def list_adjustment_types():
    limit = parse_limit(request.args.get("limit"))
    rows = store.get_adjustment_types(limit)
    return ok([x.to_dict() for x in rows], count=len(rows), limit=effective_limit(limit))


@bp.get("/<int:atid>")
def get_adjustment_type(atid: int):
    x = store.get_adjustment_type(atid)
    if not x:
        raise NotFoundError(f"Adjustment type with ID {atid} not found")
    return ok(x.to_dict())


@bp.post("")
def create_adjustment_type():
    data = json_body()
    obj = store.add_adjustment_type(data.get("description"), data.get("adjustment"))
    return ok(obj.to_dict(), 201)


@bp.delete("/<int:atid>")
def delete_adjustment_type(atid: int):
    # 404 when missing, 409 while adjustments still reference it
    deleted = store.delete_adjustment_type(atid)
    return ok({"deleted": deleted})
