# screentime_api/blueprints/health.py
from flask import Blueprint, jsonify

from screentime_api import __version__

bp = Blueprint("health", __name__)


@bp.get("/")
def index():
    """Version of the running API."""
    return jsonify({"version": __version__}), 200
