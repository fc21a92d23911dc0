"""Concurrent actions against one room serialize on the room lock."""

import threading

from impostor.game import events
from impostor.game.errors import GameError
from impostor.tests.helpers import room_of, seat_players, to_voting


def _run_concurrently(actions):
    """Start every action behind a barrier; return (results, error codes)."""
    barrier = threading.Barrier(len(actions))
    results, errors = [], []
    lock = threading.Lock()

    def worker(action):
        barrier.wait()
        try:
            outcome = action()
        except GameError as exc:
            with lock:
                errors.append(exc.code)
        else:
            with lock:
                results.append(outcome)

    threads = [threading.Thread(target=worker, args=(a,)) for a in actions]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not any(t.is_alive() for t in threads)
    return results, errors


class TestConcurrentActions:
    def test_concurrent_joins_fill_room_exactly(self, service):
        code = seat_players(service, 1)
        joins = [
            (lambda i=i: service.join_room(f"j{i}", f"Joiner{i}", code))
            for i in range(12)
        ]

        results, errors = _run_concurrently(joins)

        room = room_of(service, code)
        assert len(room.players) == service.max_players
        assert len(results) == service.max_players - 1
        assert errors == ["room_full"] * (12 - (service.max_players - 1))
        avatars = [p.avatar for p in room.players]
        assert len(set(avatars)) == len(avatars)

    def test_concurrent_votes_produce_results_once(self, service):
        code = seat_players(service, 8)
        room = to_voting(service, code)
        suspect = room.round.impostor_index
        votes = [
            (lambda pid=p.id: service.cast_vote(code, pid, suspect))
            for p in room.players
        ]

        results, errors = _run_concurrently(votes)

        assert errors == []
        finished = [
            d for r in results for d in r.directives if d.event == events.GAME_RESULTS
        ]
        assert len(finished) == 1
        assert room.phase == "results"
        assert room.round.results["impostorCaught"] is True
