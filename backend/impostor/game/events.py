from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


# Outbound event names.
PLAYER_JOINED = "player-joined"
PLAYER_LEFT = "player-left"
GAME_STARTED = "game-started"
READY_UPDATE = "ready-update"
PHASE_CHANGE = "phase-change"
WORD_SUBMITTED = "word-submitted"
VOTE_UPDATE = "vote-update"
GAME_RESULTS = "game-results"
GAME_RESET = "game-reset"


@dataclass(frozen=True)
class Directive:
    """One outbound message: broadcast to a room, or unicast to one player."""

    scope: Literal["room", "player"]
    target: str
    event: str
    payload: dict


def to_room(code: str, event: str, payload: dict) -> Directive:
    return Directive(scope="room", target=code, event=event, payload=payload)


def to_player(player_id: str, event: str, payload: dict) -> Directive:
    return Directive(scope="player", target=player_id, event=event, payload=payload)


@dataclass
class ActionResult:
    """Outcome of an accepted (or silently ignored) player action.

    ``ack`` is the reply for the initiating connection only. An ignored
    action has no directives.
    """

    ack: dict = field(default_factory=dict)
    directives: list[Directive] = field(default_factory=list)

    @property
    def ignored(self) -> bool:
        return not self.directives and not self.ack
