# screentime_api/blueprints/time_entries.py
from __future__ import annotations

from flask import Blueprint, request

from screentime_api.common.errors import NotFoundError, ValidationError
from screentime_api.common.http import ok
from screentime_api.common.parsing import effective_limit, json_body, parse_datetime, parse_limit
from screentime_api.services import store

bp = Blueprint("time_entries", __name__, url_prefix="/time-entries")


@bp.get("")
def list_time_entries():
    limit = parse_limit(request.args.get("limit"))
    rows = store.get_time_entries(limit)
    return ok([t.to_dict() for t in rows], count=len(rows), limit=effective_limit(limit))


@bp.get("/<int:teid>")
def get_time_entry(teid: int):
    t = store.get_time_entry(teid)
    if not t:
        raise NotFoundError(f"Time entry with ID {teid} not found")
    return ok(t.to_dict())


@bp.post("")
def create_time_entry():
    data = json_body()
    if data.get("time") is None:
        raise ValidationError("time is required")
    created = parse_datetime(data.get("created"), "created")
    t = store.add_time_entry(data.get("time"), created=created)
    return ok(t.to_dict(), 201)


@bp.delete("/<int:teid>")
def delete_time_entry(teid: int):
    deleted = store.delete_time_entry(teid)
    return ok({"deleted": deleted})
