import random

import pytest

from impostor.game.models import Round
from impostor.game.turns import advance_turn, current_turn_player_index, generate_turn_order


@pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 8])
def test_turn_order_is_permutation(n):
    rng = random.Random(n)
    for _ in range(50):
        order = generate_turn_order(n, rng)
        assert sorted(order) == list(range(n))


def test_turn_order_varies():
    rng = random.Random(99)
    orders = {tuple(generate_turn_order(5, rng)) for _ in range(200)}
    assert len(orders) > 20


def test_every_position_reachable():
    rng = random.Random(5)
    firsts = {generate_turn_order(4, rng)[0] for _ in range(400)}
    assert firsts == {0, 1, 2, 3}


def test_current_turn_and_advance():
    rnd = Round(topic="t", word="w", impostor_index=0, turn_order=[2, 0, 1])
    assert current_turn_player_index(rnd) == 2
    assert advance_turn(rnd) == 0
    assert advance_turn(rnd) == 1
    assert advance_turn(rnd) is None
    assert rnd.current_turn_pointer == 3
    assert current_turn_player_index(rnd) is None
