# screentime_api/services/adjusted_time.py
from __future__ import annotations

import logging
from typing import Iterable

from screentime_api.models.time_entry import TIME_MAX, format_minutes
from screentime_api.services.store import (
    AdjustmentQueryFilter,
    get_adjustment_types_for_ids,
    get_adjustments,
    get_current_time_entry,
)

log = logging.getLogger(__name__)

__all__ = ["fold_adjustments", "resolve_adjusted_time", "format_minutes"]


def fold_adjustments(base: int, deltas: Iterable[int]) -> int:
    """
    Apply `deltas` to `base` in order, flooring the running total at 0 after
    every step. A negative excursion is not carried forward: a positive delta
    after a clamp adds from 0.

    Raises OverflowError if the total leaves the unsigned 16-bit range.
    """
    running = _checked(base)
    for delta in deltas:
        running = _checked(max(running + delta, 0))
    return running


def _checked(minutes: int) -> int:
    if minutes < 0 or minutes > TIME_MAX:
        raise OverflowError(f"adjusted time {minutes} does not fit in 0..{TIME_MAX} minutes")
    return minutes


def resolve_adjusted_time() -> int:
    """
    Current adjusted time in minutes.

    Starts from the latest time entry (or 0 when there is none) and replays
    every adjustment created at or after it, oldest first. Adjustments sharing
    a timestamp are replayed in id (insertion) order.
    """
    entry = get_current_time_entry()
    base = entry.time if entry is not None else 0

    # the resolver needs the complete window, never the default page of 10
    flt = AdjustmentQueryFilter(
        since=entry.created if entry is not None else None,
        unbounded=True,
    )
    adjustments = sorted(get_adjustments(flt), key=lambda a: (a.created, a.id))

    types = get_adjustment_types_for_ids(a.adjustment_type_id for a in adjustments)
    deltas = []
    for a in adjustments:
        at = types.get(a.adjustment_type_id)
        if at is None:
            raise LookupError(
                f"adjustment {a.id} references missing adjustment type {a.adjustment_type_id}"
            )
        deltas.append(at.adjustment)

    result = fold_adjustments(base, deltas)
    log.debug(
        "adjusted time: base=%s (entry %s), %d adjustments -> %s",
        base, entry.id if entry is not None else None, len(deltas), result,
    )
    return result
