"""Typed errors for rejected player actions.

Every rejected create/join/host action raises a GameError subclass. The
realtime layer catches GameError and turns ``code`` into the acknowledgement
``{"ok": False, "error": code}``. Stale or out-of-turn actions never raise;
the state machine ignores them.
"""


class GameError(Exception):
    code = "game_error"

    def __init__(self, code: str | None = None, message: str = "") -> None:
        if code:
            self.code = code
        super().__init__(message or self.code)


class InvalidPayloadError(GameError):
    """Malformed name, room code, or action payload."""

    code = "invalid_payload"


class RoomNotFoundError(GameError):
    code = "room_not_found"


class RoomFullError(GameError):
    code = "room_full"


class GameInProgressError(GameError):
    code = "game_in_progress"


class NotAuthorizedError(GameError):
    """A non-host attempted a host-only action."""

    code = "not_authorized"


class NotEnoughPlayersError(GameError):
    code = "not_enough_players"


class NotInRoomError(GameError):
    code = "not_in_room"
