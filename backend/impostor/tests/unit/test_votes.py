"""Tests for vote casting, tallying and results."""

import itertools

from impostor.game.models import SKIP_VOTE, Player, Round
from impostor.game.votes import all_votes_in, cast_vote, compute_results, tally


def _players(n: int) -> list[Player]:
    return [Player(id=f"p{i}", name=f"Player{i}") for i in range(n)]


def _round(**kwargs) -> Round:
    defaults = dict(topic="Pets", word="Siamese Cat", impostor_index=0, turn_order=[0, 1, 2, 3])
    defaults.update(kwargs)
    return Round(**defaults)


class TestCastVote:
    def test_last_write_wins(self):
        rnd = _round()
        cast_vote(rnd, 1, 2)
        cast_vote(rnd, 1, 3)
        assert rnd.votes == {1: 3}

    def test_all_votes_in_counts_distinct_voters(self):
        rnd = _round()
        cast_vote(rnd, 0, 1)
        cast_vote(rnd, 0, 2)
        cast_vote(rnd, 1, SKIP_VOTE)
        assert not all_votes_in(rnd, 3)
        cast_vote(rnd, 2, 1)
        assert all_votes_in(rnd, 3)


class TestTally:
    def test_plurality_winner(self):
        t = tally({0: 0, 1: 0, 2: 1})
        assert t.voted_out_index == 0
        assert t.tie is False
        assert t.counts == {0: 2, 1: 1}
        assert t.max_votes == 2

    def test_tie_at_top(self):
        t = tally({0: 1, 1: 1, 2: 2, 3: 2})
        assert t.tie is True
        assert t.voted_out_index == -1

    def test_tie_independent_of_order(self):
        votes = [(0, 2), (1, 2), (2, 1), (3, 1)]
        for perm in itertools.permutations(votes):
            t = tally(dict(perm))
            assert t.tie is True
            assert t.voted_out_index == -1

    def test_higher_count_after_tie_clears_it(self):
        t = tally({0: 0, 1: 1, 2: 2, 3: 2})
        assert t.tie is False
        assert t.voted_out_index == 2

    def test_lower_tie_does_not_count(self):
        t = tally({0: 3, 1: 3, 2: 0, 3: 1})
        assert t.tie is False
        assert t.voted_out_index == 3

    def test_skip_votes_excluded(self):
        t = tally({0: SKIP_VOTE, 1: SKIP_VOTE, 2: 1})
        assert t.counts == {1: 1}
        assert t.voted_out_index == 1
        assert t.tie is False

    def test_all_skips(self):
        t = tally({0: SKIP_VOTE, 1: SKIP_VOTE, 2: SKIP_VOTE})
        assert t.counts == {}
        assert t.voted_out_index == -1
        assert t.tie is False
        assert t.max_votes == 0

    def test_no_votes(self):
        t = tally({})
        assert t.voted_out_index == -1
        assert t.tie is False

    def test_order_independent(self):
        votes = [(0, 1), (1, 1), (2, 3), (3, SKIP_VOTE), (4, 0)]
        expected = tally(dict(votes))
        for perm in itertools.permutations(votes):
            rnd = _round()
            for voter, suspect in perm:
                cast_vote(rnd, voter, suspect)
            assert tally(rnd.votes) == expected


class TestComputeResults:
    def test_impostor_caught(self):
        rnd = _round(votes={0: 0, 1: 0, 2: 1})
        results = compute_results(rnd, _players(3))
        assert results["impostorCaught"] is True
        assert results["impostorName"] == "Player0"
        assert results["votedOutIndex"] == 0
        assert results["votedOutName"] == "Player0"
        assert results["secretWord"] == "Siamese Cat"
        assert results["topic"] == "Pets"
        assert results["votesTally"] == {"0": 2, "1": 1}
        assert results["jesterEnabled"] is False
        assert results["jesterIndex"] == -1
        assert results["jesterName"] is None

    def test_tie_never_catches(self):
        rnd = _round(votes={0: 0, 1: 0, 2: 1, 3: 1})
        results = compute_results(rnd, _players(4))
        assert results["tie"] is True
        assert results["impostorCaught"] is False
        assert results["votedOutIndex"] == -1
        assert results["votedOutName"] is None

    def test_jester_wins_when_voted_out(self):
        rnd = _round(jester_enabled=True, jester_index=2, votes={0: 2, 1: 2, 2: 0, 3: 2})
        results = compute_results(rnd, _players(4))
        assert results["jesterWins"] is True
        assert results["jesterName"] == "Player2"
        assert results["impostorCaught"] is False

    def test_jester_does_not_win_on_tie(self):
        rnd = _round(jester_enabled=True, jester_index=2, votes={0: 2, 1: 2, 2: 0, 3: 0})
        results = compute_results(rnd, _players(4))
        assert results["jesterWins"] is False

    def test_all_skips_is_not_a_tie(self):
        rnd = _round(votes={0: SKIP_VOTE, 1: SKIP_VOTE, 2: SKIP_VOTE})
        results = compute_results(rnd, _players(3))
        assert results["tie"] is False
        assert results["votedOutIndex"] == -1
        assert results["impostorCaught"] is False
        assert results["votesTally"] == {}
