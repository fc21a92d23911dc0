from __future__ import annotations

from typing import Any, Callable

import structlog
from flask import request
from flask_socketio import SocketIO, join_room, leave_room

from ..game.errors import GameError, NotInRoomError
from ..game.events import ActionResult
from ..game.models import RoundOptions
from ..game.service import GameService
from ..stats.counter import PlayCounter
from . import events
from .connections import ConnectionRegistry
from .events import deliver

logger = structlog.get_logger()


def _field(data: Any, key: str) -> Any:
    """Clients may send a bare value or an object holding it under ``key``."""
    if isinstance(data, dict):
        return data.get(key)
    return data


def register_socketio_handlers(
    socketio: SocketIO,
    service: GameService,
    connections: ConnectionRegistry,
    counter: PlayCounter,
) -> None:
    def _current_room() -> str:
        code = connections.room_of(request.sid)
        if not code:
            raise NotInRoomError()
        return code

    def _run(action: Callable[[], ActionResult]) -> dict:
        try:
            result = action()
        except GameError as e:
            logger.info("action rejected", sid=request.sid, error=e.code)
            return {"ok": False, "error": e.code}
        deliver(socketio, result.directives)
        return {"ok": True, **result.ack}

    def _leave_current(sid: str) -> None:
        code = connections.unbind(sid)
        if not code:
            return
        result = service.leave_room(code, sid)
        leave_room(code, sid=sid)
        deliver(socketio, result.directives)

    @socketio.on("connect")
    def on_connect(auth=None):
        logger.debug("client connected", sid=request.sid)

    @socketio.on(events.CREATE_ROOM)
    def create_room(data):
        name = _field(data, "playerName")
        sid = request.sid
        try:
            result = service.create_room(sid, name if isinstance(name, str) else None)
        except GameError as e:
            logger.info("create rejected", sid=sid, error=e.code)
            return {"ok": False, "error": e.code}

        # A connection sits in at most one room.
        _leave_current(sid)
        code = result.ack["roomCode"]
        join_room(code)
        connections.bind(sid, code)
        return {"ok": True, **result.ack}

    @socketio.on(events.JOIN_ROOM)
    def join_game_room(data):
        payload = data if isinstance(data, dict) else {}
        name = payload.get("playerName")
        code = payload.get("roomCode")
        sid = request.sid

        try:
            result = service.join_room(
                sid,
                name if isinstance(name, str) else None,
                code if isinstance(code, str) else None,
            )
        except GameError as e:
            logger.info("join rejected", sid=sid, error=e.code)
            return {"ok": False, "error": e.code}

        _leave_current(sid)
        room_code = result.ack["roomCode"]
        join_room(room_code)
        connections.bind(sid, room_code)
        deliver(socketio, result.directives)
        return {"ok": True, **result.ack}

    @socketio.on(events.START_GAME)
    def start_game(data=None):
        raw = data.get("options", data) if isinstance(data, dict) else None
        options = RoundOptions.from_payload(raw if isinstance(raw, dict) else None)

        def action() -> ActionResult:
            return service.start_game(_current_room(), request.sid, options)

        ack = _run(action)
        if ack["ok"]:
            socketio.start_background_task(counter.record_game, connections.room_of(request.sid) or "")
        return ack

    @socketio.on(events.PLAYER_READY)
    def player_ready(data=None):
        return _run(lambda: service.mark_ready(_current_room(), request.sid))

    @socketio.on(events.SUBMIT_WORD)
    def submit_word(data):
        word = _field(data, "word")
        if not isinstance(word, str):
            return {"ok": True}
        return _run(lambda: service.submit_word(_current_room(), request.sid, word))

    @socketio.on(events.PROCEED_TO_VOTING)
    def proceed_to_voting(data=None):
        return _run(lambda: service.proceed_to_voting(_current_room(), request.sid))

    @socketio.on(events.CAST_VOTE)
    def cast_vote(data):
        suspect = _field(data, "suspectIndex")
        return _run(lambda: service.cast_vote(_current_room(), request.sid, suspect))

    @socketio.on(events.PLAY_AGAIN)
    def play_again(data=None):
        return _run(lambda: service.play_again(_current_room(), request.sid))

    @socketio.on(events.LEAVE_ROOM)
    def room_leave(data=None):
        _leave_current(request.sid)
        return {"ok": True}

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        logger.debug("client disconnected", sid=request.sid)
        _leave_current(request.sid)
