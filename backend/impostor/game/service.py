from __future__ import annotations

import random

import structlog

from ..config import Config
from . import events
from .errors import (
    GameInProgressError,
    InvalidPayloadError,
    NotAuthorizedError,
    NotEnoughPlayersError,
    NotInRoomError,
    RoomFullError,
    RoomNotFoundError,
)
from .events import ActionResult, Directive, to_player, to_room
from .models import SKIP_VOTE, Player, Room, Round, RoundOptions
from .registry import RoomRegistry, is_valid_room_code
from .roles import reveal_for, select_round
from .turns import advance_turn, current_turn_player_index
from .votes import all_votes_in, cast_vote, compute_results
from .words import WORD_TABLE, WordEntry

logger = structlog.get_logger()


AVATARS = (
    "😀", "😎", "🤠", "🥳", "😺", "🦊", "🐸", "🦉",
    "🐙", "🦋", "🌸", "⭐", "🔥", "💎", "🎮", "🎨",
)

MAX_NAME_LENGTH = 16
ACTIVE_PHASES = ("reveal", "submission", "discussion", "voting")


def validate_name(name: str | None) -> str:
    n = (name or "").strip()
    if not n or len(n) > MAX_NAME_LENGTH:
        raise InvalidPayloadError("invalid_name")
    if "<" in n or ">" in n:
        raise InvalidPayloadError("invalid_name")
    for ch in n:
        if ord(ch) < 32:
            raise InvalidPayloadError("invalid_name")
    return n


def pick_avatar(rng: random.Random, used: list[str]) -> str:
    available = [a for a in AVATARS if a not in used]
    if not available:
        available = list(AVATARS)
    return available[rng.randrange(len(available))]


class GameService:
    """Authoritative state machine for every room in a registry.

    Each public method runs under the room's lock and returns an
    ActionResult. Rejected requests raise GameError; stale or out-of-turn
    actions come back as an empty ActionResult.
    """

    def __init__(
        self,
        registry: RoomRegistry | None = None,
        rng: random.Random | None = None,
        word_table: tuple[WordEntry, ...] = WORD_TABLE,
        max_players: int | None = None,
        min_players: int | None = None,
        jester_min_players: int | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.registry = registry or RoomRegistry(rng=self.rng)
        self.word_table = word_table
        self.max_players = Config.MAX_PLAYERS if max_players is None else max_players
        self.min_players = Config.MIN_PLAYERS if min_players is None else min_players
        self.jester_min_players = (
            Config.JESTER_MIN_PLAYERS if jester_min_players is None else jester_min_players
        )

    # ------------------------------------------------------------------
    # Lookup helpers

    def _require_room(self, code: str | None) -> Room:
        if not is_valid_room_code(code):
            raise InvalidPayloadError("invalid_room_code")
        room = self.registry.find_room(code)
        if room is None:
            raise RoomNotFoundError()
        return room

    def _require_host(self, room: Room, player_id: str) -> None:
        if room.index_of(player_id) < 0:
            raise NotInRoomError()
        if room.host_id != player_id:
            raise NotAuthorizedError()

    # ------------------------------------------------------------------
    # Lobby

    def create_room(self, player_id: str, name: str | None) -> ActionResult:
        n = validate_name(name)
        room = self.registry.create_room(player_id, n, host_avatar=pick_avatar(self.rng, []))
        logger.info("room created", room_code=room.code, host=n)
        return ActionResult(ack={"roomCode": room.code, "players": room.public_players()})

    def join_room(self, player_id: str, name: str | None, code: str | None) -> ActionResult:
        n = validate_name(name)
        room = self._require_room(code)
        with room.lock:
            # A room emptied concurrently is about to leave the registry.
            if not room.players:
                raise RoomNotFoundError()
            if room.index_of(player_id) >= 0:
                raise InvalidPayloadError("already_in_room")
            if len(room.players) >= self.max_players:
                raise RoomFullError()
            if room.phase != "lobby":
                raise GameInProgressError()

            avatar = pick_avatar(self.rng, [p.avatar for p in room.players])
            room.players.append(Player(id=player_id, name=n, avatar=avatar))
            players = room.public_players()
            logger.info("player joined", room_code=room.code, player=n, player_count=len(players))
            return ActionResult(
                ack={"roomCode": room.code, "players": players},
                directives=[to_room(room.code, events.PLAYER_JOINED, {"players": players})],
            )

    # ------------------------------------------------------------------
    # Lobby -> Reveal

    def start_game(self, code: str | None, player_id: str, options: RoundOptions | None = None) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            self._require_host(room, player_id)
            if room.phase != "lobby":
                raise GameInProgressError()
            if len(room.players) < self.min_players:
                raise NotEnoughPlayersError()

            opts = options or RoundOptions()
            rnd = select_round(
                len(room.players),
                opts,
                self.rng,
                table=self.word_table,
                jester_min_players=self.jester_min_players,
            )
            room.round = rnd
            room.phase = "reveal"
            for p in room.players:
                p.ready = False

            logger.info(
                "game started",
                room_code=room.code,
                player_count=len(room.players),
                jester_enabled=rnd.jester_enabled,
            )

            players = room.public_players()
            directives: list[Directive] = []
            for index, p in enumerate(room.players):
                payload = {
                    "phase": room.phase,
                    **reveal_for(index, rnd).to_public(),
                    "players": players,
                    "turnOrder": list(rnd.turn_order),
                    "myIndex": index,
                    "jesterEnabled": rnd.jester_enabled,
                    "noTopicReveal": rnd.no_topic_reveal,
                    "impostorHint": rnd.impostor_hint_enabled,
                }
                directives.append(to_player(p.id, events.GAME_STARTED, payload))
            return ActionResult(ack={"started": True}, directives=directives)

    # ------------------------------------------------------------------
    # Reveal -> Submission

    def mark_ready(self, code: str | None, player_id: str) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            player = room.get_player(player_id)
            if player is None or room.phase != "reveal" or room.round is None:
                return ActionResult()
            player.ready = True
            return ActionResult(directives=self._check_all_ready(room))

    def _check_all_ready(self, room: Room) -> list[Directive]:
        ready = sum(1 for p in room.players if p.ready)
        directives = [
            to_room(room.code, events.READY_UPDATE, {"readyCount": ready, "totalPlayers": len(room.players)})
        ]
        if ready < len(room.players):
            return directives

        room.phase = "submission"
        room.round.current_turn_pointer = 0
        room.round.submitted_words = []
        logger.info("phase changed", room_code=room.code, phase=room.phase)
        directives.append(
            to_room(
                room.code,
                events.PHASE_CHANGE,
                {
                    "phase": room.phase,
                    "currentTurnIndex": current_turn_player_index(room.round),
                    "submittedWords": [],
                },
            )
        )
        return directives

    # ------------------------------------------------------------------
    # Submission -> Discussion

    def submit_word(self, code: str | None, player_id: str, word: str | None) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            rnd = room.round
            if room.phase != "submission" or rnd is None:
                return ActionResult()
            index = room.index_of(player_id)
            if index < 0 or index != current_turn_player_index(rnd):
                return ActionResult()
            w = (word or "").strip()
            if not w:
                return ActionResult()

            rnd.submitted_words.append(
                {"playerIndex": index, "playerName": room.players[index].name, "word": w}
            )
            advance_turn(rnd)
            return ActionResult(directives=self._after_submission(room))

    def _after_submission(self, room: Room) -> list[Directive]:
        rnd = room.round
        submitted = [dict(s) for s in rnd.submitted_words]
        if rnd.current_turn_pointer >= len(room.players):
            room.phase = "discussion"
            logger.info("phase changed", room_code=room.code, phase=room.phase)
            return [
                to_room(room.code, events.PHASE_CHANGE, {"phase": room.phase, "submittedWords": submitted})
            ]
        return [
            to_room(
                room.code,
                events.WORD_SUBMITTED,
                {"submittedWords": submitted, "currentTurnIndex": current_turn_player_index(rnd)},
            )
        ]

    # ------------------------------------------------------------------
    # Discussion -> Voting

    def proceed_to_voting(self, code: str | None, player_id: str) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            self._require_host(room, player_id)
            if room.phase != "discussion" or room.round is None:
                return ActionResult()
            room.round.votes = {}
            room.phase = "voting"
            logger.info("phase changed", room_code=room.code, phase=room.phase)
            return ActionResult(
                ack={"phase": room.phase},
                directives=[to_room(room.code, events.PHASE_CHANGE, {"phase": room.phase})],
            )

    # ------------------------------------------------------------------
    # Voting -> Results

    def cast_vote(self, code: str | None, player_id: str, suspect_index: object) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            rnd = room.round
            if room.phase != "voting" or rnd is None:
                return ActionResult()
            voter = room.index_of(player_id)
            if voter < 0:
                return ActionResult()
            # bool is an int subclass; reject it explicitly.
            if isinstance(suspect_index, bool) or not isinstance(suspect_index, int):
                return ActionResult()
            if suspect_index != SKIP_VOTE and not 0 <= suspect_index < len(room.players):
                return ActionResult()

            cast_vote(rnd, voter, suspect_index)
            return ActionResult(directives=self._check_all_voted(room))

    def _check_all_voted(self, room: Room) -> list[Directive]:
        rnd = room.round
        if not all_votes_in(rnd, len(room.players)):
            return [
                to_room(
                    room.code,
                    events.VOTE_UPDATE,
                    {"votesReceived": len(rnd.votes), "totalPlayers": len(room.players)},
                )
            ]

        rnd.results = compute_results(rnd, room.players)
        room.phase = "results"
        logger.info(
            "round finished",
            room_code=room.code,
            impostor_caught=rnd.results["impostorCaught"],
            tie=rnd.results["tie"],
        )
        return [to_room(room.code, events.GAME_RESULTS, dict(rnd.results))]

    # ------------------------------------------------------------------
    # Results -> Lobby

    def play_again(self, code: str | None, player_id: str) -> ActionResult:
        room = self._require_room(code)
        with room.lock:
            self._require_host(room, player_id)
            if room.phase != "results":
                return ActionResult()
            self._reset_to_lobby(room)
            return ActionResult(
                ack={"phase": room.phase},
                directives=[to_room(room.code, events.GAME_RESET, {"players": room.public_players()})],
            )

    def _reset_to_lobby(self, room: Room) -> None:
        room.round = None
        room.phase = "lobby"
        for p in room.players:
            p.ready = False
        logger.info("phase changed", room_code=room.code, phase=room.phase)

    # ------------------------------------------------------------------
    # Leave / disconnect (any phase)

    def leave_room(self, code: str | None, player_id: str) -> ActionResult:
        room = self.registry.find_room(code)
        if room is None:
            return ActionResult()
        with room.lock:
            index = room.index_of(player_id)
            if index < 0:
                return ActionResult()

            player = room.players.pop(index)
            logger.info("player left", room_code=room.code, player=player.name, player_count=len(room.players))

            if not room.players:
                room.round = None
                self.registry.remove_room(room.code)
                logger.info("room removed", room_code=room.code)
                return ActionResult()

            if room.host_id == player.id:
                room.players[0].is_host = True
                room.host_id = room.players[0].id

            directives = [
                to_room(
                    room.code,
                    events.PLAYER_LEFT,
                    {
                        "players": room.public_players(),
                        "leftPlayerName": player.name,
                        "hostId": room.host_id,
                    },
                )
            ]
            if room.phase in ACTIVE_PHASES and room.round is not None:
                directives.extend(self._repair_round(room, index))
            return ActionResult(directives=directives)

    def _repair_round(self, room: Room, removed: int) -> list[Directive]:
        """Keep the active round consistent after ``players[removed]`` left.

        The round is abandoned when the impostor leaves or too few players
        remain; otherwise every positional reference is renumbered and the
        current phase's completion condition is re-checked.
        """
        rnd = room.round
        reason = None
        if removed == rnd.impostor_index:
            reason = "impostor_left"
        elif len(room.players) < self.min_players:
            reason = "not_enough_players"
        if reason is not None:
            self._reset_to_lobby(room)
            logger.info("round aborted", room_code=room.code, reason=reason)
            return [
                to_room(room.code, events.GAME_RESET, {"players": room.public_players(), "reason": reason})
            ]

        _reindex_round(rnd, removed)

        if room.phase == "reveal":
            return self._check_all_ready(room)
        if room.phase == "submission":
            return self._after_submission(room)
        if room.phase == "voting":
            return self._check_all_voted(room)
        return []


def _shift(index: int, removed: int) -> int:
    return index - 1 if index > removed else index


def _reindex_round(rnd: Round, removed: int) -> None:
    rnd.impostor_index = _shift(rnd.impostor_index, removed)

    if rnd.jester_index is not None:
        if rnd.jester_index == removed:
            rnd.jester_index = None
            rnd.jester_enabled = False
        else:
            rnd.jester_index = _shift(rnd.jester_index, removed)

    position = rnd.turn_order.index(removed) if removed in rnd.turn_order else len(rnd.turn_order)
    if position < rnd.current_turn_pointer:
        rnd.current_turn_pointer -= 1
    rnd.turn_order = [_shift(i, removed) for i in rnd.turn_order if i != removed]

    for s in rnd.submitted_words:
        if s["playerIndex"] > removed:
            s["playerIndex"] -= 1
        elif s["playerIndex"] == removed:
            s["playerIndex"] = -1

    # The departed player's own vote is dropped; votes against them count as skips.
    rnd.votes = {
        _shift(voter, removed): SKIP_VOTE if suspect in (SKIP_VOTE, removed) else _shift(suspect, removed)
        for voter, suspect in rnd.votes.items()
        if voter != removed
    }
