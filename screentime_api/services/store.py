# screentime_api/services/store.py
"""
Persistence operations for adjustment types, adjustments and time entries.

Adjustments and time entries are append-only: there are create, read and
delete operations but no updates. Every mutation commits its own
transaction; store failures propagate to the caller untouched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from screentime_api.common.errors import IntegrityViolation, NotFoundError, ValidationError
from screentime_api.common.parsing import (
    effective_limit,
    parse_datetime,
    parse_int,
    parse_limit,
)
from screentime_api.extensions import db
from screentime_api.models.adjustment import (
    ADJUSTMENT_MAX,
    ADJUSTMENT_MIN,
    Adjustment,
    AdjustmentType,
)
from screentime_api.models.time_entry import TIME_MAX, TIME_MIN, TimeEntry

log = logging.getLogger(__name__)


@dataclass
class AdjustmentQueryFilter:
    """
    Filter for `get_adjustments()`.

    limit               -> max rows to return; None means DEFAULT_LIMIT (10)
    adjustment_type_id  -> only adjustments of this type
    since               -> only adjustments with created >= since
    unbounded           -> ignore `limit` and return every matching row
    """
    limit: Optional[int] = None
    adjustment_type_id: Optional[int] = None
    since: Optional[datetime] = None
    unbounded: bool = False

    @classmethod
    def from_args(cls, args: Mapping) -> "AdjustmentQueryFilter":
        """Build a filter from query-string style values (`limit`, `type`, `since`)."""
        atid = args.get("type")
        if atid in (None, ""):
            atid = args.get("adjustment_type_id")
        return cls(
            limit=parse_limit(args.get("limit")),
            adjustment_type_id=parse_int(atid, "type", lo=1) if atid not in (None, "") else None,
            since=parse_datetime(args.get("since"), "since"),
        )


# ---------- adjustment types ----------

def get_adjustment_type(atid: int) -> Optional[AdjustmentType]:
    return db.session.get(AdjustmentType, atid)


def get_adjustment_types(limit: Optional[int] = None) -> List[AdjustmentType]:
    return (
        AdjustmentType.query
        .order_by(AdjustmentType.id.asc())
        .limit(effective_limit(limit))
        .all()
    )


def get_adjustment_types_for_ids(ids: Iterable[int]) -> Dict[int, AdjustmentType]:
    """Batch lookup so resolving N adjustments costs one query, not N."""
    wanted = set(ids)
    if not wanted:
        return {}
    rows = AdjustmentType.query.filter(AdjustmentType.id.in_(wanted)).all()
    return {at.id: at for at in rows}


def add_adjustment_type(description: str, adjustment) -> AdjustmentType:
    if description is not None and not isinstance(description, str):
        raise ValidationError("description must be a string")
    description = (description or "").strip()
    if not description:
        raise ValidationError("description is required")
    if len(description) > 255:
        raise ValidationError("description must be at most 255 characters")
    delta = parse_int(adjustment, "adjustment", ADJUSTMENT_MIN, ADJUSTMENT_MAX)

    obj = AdjustmentType(description=description, adjustment=delta)
    db.session.add(obj)
    db.session.commit()
    log.info("added adjustment type %s (%+d) %r", obj.id, delta, description)
    return obj


def delete_adjustment_type(atid: int) -> int:
    """
    Delete the adjustment type with the given id.

    Refused with IntegrityViolation while any adjustment still references it;
    nothing is deleted in that case. Returns the number of deleted rows.
    """
    obj = get_adjustment_type(atid)
    if obj is None:
        raise NotFoundError(f"Adjustment type with ID {atid} not found")

    in_use = (
        db.session.query(Adjustment.id)
        .filter(Adjustment.adjustment_type_id == atid)
        .first()
    )
    if in_use is not None:
        raise IntegrityViolation(
            f"There are still adjustments referencing adjustment type {atid}",
            payload={"adjustment_type_id": atid},
        )

    db.session.delete(obj)
    db.session.commit()
    log.info("deleted adjustment type %s", atid)
    return 1


# ---------- adjustments ----------

def get_adjustment(aid: int) -> Optional[Adjustment]:
    return db.session.get(Adjustment, aid)


def get_adjustments(query_filter: Optional[AdjustmentQueryFilter] = None) -> List[Adjustment]:
    """Adjustments matching `query_filter`, newest first (ties: highest id first)."""
    flt = query_filter or AdjustmentQueryFilter()
    q = Adjustment.query

    if flt.adjustment_type_id is not None:
        q = q.filter(Adjustment.adjustment_type_id == flt.adjustment_type_id)

    # inclusive lower bound
    if flt.since is not None:
        q = q.filter(Adjustment.created >= flt.since)

    q = q.order_by(Adjustment.created.desc(), Adjustment.id.desc())
    if not flt.unbounded:
        q = q.limit(effective_limit(flt.limit))
    return q.all()


def add_adjustment(
    adjustment_type: AdjustmentType,
    comment: Optional[str] = None,
    created: Optional[datetime] = None,
) -> Adjustment:
    comment = (comment or "").strip() or None
    if comment is not None and len(comment) > 255:
        raise ValidationError("comment must be at most 255 characters")

    obj = Adjustment(adjustment_type_id=adjustment_type.id, comment=comment)
    if created is not None:
        obj.created = created
    db.session.add(obj)
    db.session.commit()
    log.info(
        "added adjustment %s (type %s, %+d) at %s",
        obj.id, adjustment_type.id, adjustment_type.adjustment, obj.created,
    )
    return obj


def delete_adjustment(aid: int) -> int:
    obj = get_adjustment(aid)
    if obj is None:
        raise NotFoundError(f"Adjustment with ID {aid} not found")
    db.session.delete(obj)
    db.session.commit()
    log.info("deleted adjustment %s", aid)
    return 1


# ---------- time entries ----------

def get_time_entry(teid: int) -> Optional[TimeEntry]:
    return db.session.get(TimeEntry, teid)


def get_current_time_entry() -> Optional[TimeEntry]:
    """The time entry with the latest `created`, or None if there is none."""
    return (
        TimeEntry.query
        .order_by(TimeEntry.created.desc(), TimeEntry.id.desc())
        .first()
    )


def get_time_entries(limit: Optional[int] = None) -> List[TimeEntry]:
    return (
        TimeEntry.query
        .order_by(TimeEntry.created.desc(), TimeEntry.id.desc())
        .limit(effective_limit(limit))
        .all()
    )


def add_time_entry(time, created: Optional[datetime] = None) -> TimeEntry:
    minutes = parse_int(time, "time", TIME_MIN, TIME_MAX)
    obj = TimeEntry(time=minutes)
    if created is not None:
        obj.created = created
    db.session.add(obj)
    db.session.commit()
    log.info("added time entry %s (%s) at %s", obj.id, obj.time_formatted, obj.created)
    return obj


def delete_time_entry(teid: int) -> int:
    obj = get_time_entry(teid)
    if obj is None:
        raise NotFoundError(f"Time entry with ID {teid} not found")
    db.session.delete(obj)
    db.session.commit()
    log.info("deleted time entry %s", teid)
    return 1
