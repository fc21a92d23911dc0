from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Literal


Phase = Literal["lobby", "reveal", "submission", "discussion", "voting", "results"]
Role = Literal["impostor", "jester", "crew"]

# Suspect value for a vote that accuses nobody.
SKIP_VOTE = -1


@dataclass
class Player:
    id: str
    name: str
    avatar: str = ""
    is_host: bool = False
    ready: bool = False

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "isHost": self.is_host,
            "ready": self.ready,
        }


@dataclass
class RoundOptions:
    jester_enabled: bool = False
    no_topic_reveal: bool = False
    impostor_hint: bool = True

    @classmethod
    def from_payload(cls, data: dict | None) -> RoundOptions:
        """Build options from a client payload; unset or non-bool keys keep defaults."""
        payload = data or {}
        options = cls()
        for key, attr in (
            ("jesterEnabled", "jester_enabled"),
            ("noTopicReveal", "no_topic_reveal"),
            ("impostorHint", "impostor_hint"),
        ):
            value = payload.get(key)
            if isinstance(value, bool):
                setattr(options, attr, value)
        return options


@dataclass
class Round:
    topic: str
    word: str
    impostor_index: int
    turn_order: list[int]
    hints: list[str] = field(default_factory=list)
    jester_enabled: bool = False
    jester_index: int | None = None
    no_topic_reveal: bool = False
    impostor_hint_enabled: bool = True
    impostor_hint: str | None = None
    current_turn_pointer: int = 0
    submitted_words: list[dict] = field(default_factory=list)
    votes: dict[int, int] = field(default_factory=dict)
    results: dict | None = None


@dataclass
class Room:
    code: str
    host_id: str
    phase: Phase = "lobby"
    players: list[Player] = field(default_factory=list)
    round: Round | None = None
    created_at_ms: int = 0
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    def index_of(self, player_id: str) -> int:
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i
        return -1

    def get_player(self, player_id: str) -> Player | None:
        idx = self.index_of(player_id)
        return self.players[idx] if idx >= 0 else None

    def public_players(self) -> list[dict]:
        return [p.to_public() for p in self.players]
