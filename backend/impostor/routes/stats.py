from __future__ import annotations

from flask import Blueprint, current_app, jsonify

bp = Blueprint("stats", __name__)


@bp.get("/stats")
def get_stats():
    counter = current_app.extensions["impostor.counter"]
    return jsonify({"gamesPlayed": counter.games_played})
