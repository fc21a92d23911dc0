"""Builders for rooms in a given phase, driven through GameService only."""

from __future__ import annotations

from impostor.game.models import Room, RoundOptions
from impostor.game.service import GameService

HOST_ID = "p0"


def seat_players(service: GameService, count: int) -> str:
    """Create a room hosted by ``p0`` with players ``p0..p{count-1}``; return its code."""
    code = service.create_room(HOST_ID, "Player0").ack["roomCode"]
    for i in range(1, count):
        service.join_room(f"p{i}", f"Player{i}", code)
    return code


def room_of(service: GameService, code: str) -> Room:
    room = service.registry.find_room(code)
    assert room is not None
    return room


def start_and_ready(service: GameService, code: str, options: RoundOptions | None = None) -> Room:
    service.start_game(code, HOST_ID, options)
    room = room_of(service, code)
    for p in list(room.players):
        service.mark_ready(code, p.id)
    return room


def submit_all(service: GameService, code: str) -> Room:
    room = room_of(service, code)
    for idx in list(room.round.turn_order):
        service.submit_word(code, room.players[idx].id, f"clue{idx}")
    return room


def to_voting(service: GameService, code: str, options: RoundOptions | None = None) -> Room:
    start_and_ready(service, code, options)
    submit_all(service, code)
    service.proceed_to_voting(code, HOST_ID)
    return room_of(service, code)
