import random

import pytest

from impostor.game.registry import RoomRegistry
from impostor.game.service import GameService
from impostor.server import create_app
from impostor.stats.counter import PlayCounter


@pytest.fixture
def game_service():
    rng = random.Random(4321)
    return GameService(registry=RoomRegistry(rng=rng), rng=rng)


@pytest.fixture
def counter():
    return PlayCounter()


@pytest.fixture
def server(game_service, counter):
    app, socketio = create_app(service=game_service, counter=counter)
    app.config["TESTING"] = True
    return app, socketio


@pytest.fixture
def http(server):
    app, _ = server
    return app.test_client()


@pytest.fixture
def connect(server):
    app, socketio = server
    clients = []

    def _connect():
        client = socketio.test_client(app)
        assert client.is_connected()
        clients.append(client)
        return client

    yield _connect

    for client in clients:
        if client.is_connected():
            client.disconnect()
