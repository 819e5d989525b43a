# screentime_api/blueprints/adjusted_time.py
from flask import Blueprint

from screentime_api.common.http import ok
from screentime_api.services.adjusted_time import format_minutes, resolve_adjusted_time

bp = Blueprint("adjusted_time", __name__)


@bp.get("/time")
def get_adjusted_time():
    """Current time, adjusted by every adjustment since the latest time entry."""
    minutes = resolve_adjusted_time()
    return ok({"time": minutes, "formatted_time": format_minutes(minutes)})
