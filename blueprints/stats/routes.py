# blueprints/stats/routes.py
from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from flask_login import login_required

from blueprints.bookings.services import BookingStore
from .services import compute_usage_stats

api_bp = Blueprint("stats_api", __name__)

@api_bp.get("/stats")
@login_required
def usage_stats():
    # всегда свежая выборка, без кэша
    cfg = current_app.config
    stats = compute_usage_stats(
        BookingStore().list(),
        week_starts_on=cfg["STATS_WEEK_STARTS_ON"],
        top_n=cfg["STATS_TOP_USERS"],
        recent_n=cfg["STATS_RECENT_ACTIVITY"],
    )
    return jsonify(stats.to_dict())
