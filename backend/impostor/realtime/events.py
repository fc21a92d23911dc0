from __future__ import annotations

from typing import Iterable

from flask_socketio import SocketIO

from ..game.events import Directive


# Inbound (client -> server) event names.
CREATE_ROOM = "create-room"
JOIN_ROOM = "join-room"
START_GAME = "start-game"
PLAYER_READY = "player-ready"
SUBMIT_WORD = "submit-word"
PROCEED_TO_VOTING = "proceed-to-voting"
CAST_VOTE = "cast-vote"
PLAY_AGAIN = "play-again"
LEAVE_ROOM = "leave-room"


def deliver(socketio: SocketIO, directives: Iterable[Directive]) -> None:
    # Socket.IO rooms are keyed by room code; every sid is also its own room.
    for d in directives:
        socketio.emit(d.event, d.payload, to=d.target)
