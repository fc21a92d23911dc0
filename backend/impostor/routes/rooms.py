from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game.models import Room
from ..game.registry import is_valid_room_code
from ..game.turns import current_turn_player_index

bp = Blueprint("rooms", __name__)


def room_public_state(room: Room) -> dict:
    # Never expose roles, the secret word, or individual votes.
    with room.lock:
        payload = {
            "code": room.code,
            "hostId": room.host_id,
            "phase": room.phase,
            "createdAtMs": room.created_at_ms,
            "players": room.public_players(),
        }
        rnd = room.round
        if rnd is not None:
            payload["turnOrder"] = list(rnd.turn_order)
            if room.phase == "submission":
                payload["currentTurnIndex"] = current_turn_player_index(rnd)
            if room.phase in ("submission", "discussion", "voting", "results"):
                payload["submittedWords"] = [dict(s) for s in rnd.submitted_words]
            if room.phase == "voting":
                payload["votesReceived"] = len(rnd.votes)
            if room.phase == "results" and rnd.results is not None:
                payload["results"] = dict(rnd.results)
        return payload


@bp.get("/rooms/<code>")
def get_room(code: str):
    if not is_valid_room_code(code):
        return jsonify({"error": "invalid_room_code"}), 400

    service = current_app.extensions["impostor.service"]
    room = service.registry.find_room(code)
    if not room:
        return jsonify({"error": "room_not_found"}), 404
    return jsonify(room_public_state(room))
