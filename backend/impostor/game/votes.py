from __future__ import annotations

from dataclasses import dataclass, field

from .models import SKIP_VOTE, Player, Round


@dataclass
class Tally:
    counts: dict[int, int] = field(default_factory=dict)
    voted_out_index: int = -1
    tie: bool = False
    max_votes: int = 0


def cast_vote(rnd: Round, voter_index: int, suspect_index: int) -> None:
    rnd.votes[voter_index] = suspect_index


def all_votes_in(rnd: Round, player_count: int) -> bool:
    return len(rnd.votes) >= player_count


def tally(votes: dict[int, int]) -> Tally:
    """Plurality count over ``votes`` (voter index -> suspect index).

    Skip votes are excluded from every count. Suspects are scanned in
    ascending index order so the outcome does not depend on the order votes
    were cast. Any tie at the top count votes nobody out.
    """
    counts: dict[int, int] = {}
    for suspect in votes.values():
        if suspect == SKIP_VOTE:
            continue
        counts[suspect] = counts.get(suspect, 0) + 1

    result = Tally(counts=dict(sorted(counts.items())))
    winner = -1
    for suspect, count in result.counts.items():
        if count > result.max_votes:
            result.max_votes = count
            winner = suspect
            result.tie = False
        elif count == result.max_votes:
            result.tie = True

    result.voted_out_index = -1 if result.tie else winner
    return result


def _name_at(players: list[Player], index: int | None) -> str | None:
    if index is None or index < 0 or index >= len(players):
        return None
    return players[index].name


def compute_results(rnd: Round, players: list[Player]) -> dict:
    t = tally(rnd.votes)
    caught = not t.tie and t.voted_out_index == rnd.impostor_index
    jester_wins = (
        rnd.jester_index is not None
        and not t.tie
        and t.voted_out_index == rnd.jester_index
    )

    return {
        "impostorIndex": rnd.impostor_index,
        "impostorName": _name_at(players, rnd.impostor_index),
        "jesterEnabled": rnd.jester_enabled,
        "jesterIndex": -1 if rnd.jester_index is None else rnd.jester_index,
        "jesterName": _name_at(players, rnd.jester_index),
        "jesterWins": jester_wins,
        "secretWord": rnd.word,
        "topic": rnd.topic,
        "votedOutIndex": t.voted_out_index,
        "votedOutName": _name_at(players, t.voted_out_index),
        "impostorCaught": caught,
        "tie": t.tie,
        "maxVotes": t.max_votes,
        "votesTally": {str(k): v for k, v in t.counts.items()},
    }
