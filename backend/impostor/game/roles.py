from __future__ import annotations

import random
from dataclasses import dataclass

from .models import Role, Round, RoundOptions
from .turns import generate_turn_order
from .words import WORD_TABLE, WordEntry, pick_entry


JESTER_MIN_PLAYERS = 4


@dataclass(frozen=True)
class RevealPayload:
    role: Role
    topic: str | None
    word: str | None
    hint: str | None

    def to_public(self) -> dict:
        return {
            "role": self.role,
            "isImpostor": self.role == "impostor",
            "isJester": self.role == "jester",
            "topic": self.topic,
            "word": self.word,
            "hint": self.hint,
        }


def select_round(
    player_count: int,
    options: RoundOptions,
    rng: random.Random,
    table: tuple[WordEntry, ...] = WORD_TABLE,
    jester_min_players: int = JESTER_MIN_PLAYERS,
) -> Round:
    entry = pick_entry(rng, table)
    impostor_index = rng.randrange(player_count)

    jester_enabled = options.jester_enabled and player_count >= jester_min_players
    jester_index = None
    if jester_enabled:
        while True:
            candidate = rng.randrange(player_count)
            if candidate != impostor_index:
                jester_index = candidate
                break

    hints = list(entry.hints)
    impostor_hint = None
    if options.impostor_hint and hints:
        impostor_hint = hints[rng.randrange(len(hints))]

    return Round(
        topic=entry.topic,
        word=entry.word,
        hints=hints,
        impostor_index=impostor_index,
        jester_enabled=jester_enabled,
        jester_index=jester_index,
        no_topic_reveal=options.no_topic_reveal,
        impostor_hint_enabled=options.impostor_hint,
        impostor_hint=impostor_hint,
        turn_order=generate_turn_order(player_count, rng),
    )


def role_of(player_index: int, rnd: Round) -> Role:
    if player_index == rnd.impostor_index:
        return "impostor"
    if rnd.jester_index is not None and player_index == rnd.jester_index:
        return "jester"
    return "crew"


def reveal_for(player_index: int, rnd: Round) -> RevealPayload:
    """What ``player_index`` is allowed to see about the round.

    The impostor always sees the topic and never the word. Everyone else sees
    the word, and the topic unless ``no_topic_reveal`` is set. Only the
    impostor can receive the hint, which is fixed when the round is created.
    """
    role = role_of(player_index, rnd)
    if role == "impostor":
        hint = rnd.impostor_hint if rnd.impostor_hint_enabled and rnd.hints else None
        return RevealPayload(role=role, topic=rnd.topic, word=None, hint=hint)

    topic = None if rnd.no_topic_reveal else rnd.topic
    return RevealPayload(role=role, topic=topic, word=rnd.word, hint=None)
