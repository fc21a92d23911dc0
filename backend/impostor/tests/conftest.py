import random

import pytest

from impostor.game.registry import RoomRegistry
from impostor.game.service import GameService


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def service(rng):
    return GameService(registry=RoomRegistry(rng=rng), rng=rng, max_players=8, min_players=3, jester_min_players=4)
