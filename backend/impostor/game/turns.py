from __future__ import annotations

import random

from .models import Round


def generate_turn_order(player_count: int, rng: random.Random) -> list[int]:
    """Fisher-Yates shuffle of ``range(player_count)``."""
    order = list(range(player_count))
    for i in range(len(order) - 1, 0, -1):
        j = rng.randint(0, i)
        order[i], order[j] = order[j], order[i]
    return order


def current_turn_player_index(rnd: Round) -> int | None:
    if rnd.current_turn_pointer >= len(rnd.turn_order):
        return None
    return rnd.turn_order[rnd.current_turn_pointer]


def advance_turn(rnd: Round) -> int | None:
    rnd.current_turn_pointer += 1
    return current_turn_player_index(rnd)
