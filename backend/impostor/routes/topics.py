from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game.words import list_topics

bp = Blueprint("topics", __name__)


@bp.get("/topics")
def get_topics():
    service = current_app.extensions["impostor.service"]
    return jsonify({"topics": list_topics(service.word_table)})
