from __future__ import annotations

from threading import RLock


class ConnectionRegistry:
    """Which room each Socket.IO connection (sid) currently sits in.

    The sid doubles as the player id inside the room.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._rooms: dict[str, str] = {}

    def bind(self, sid: str, room_code: str) -> None:
        with self._lock:
            self._rooms[sid] = room_code

    def room_of(self, sid: str) -> str | None:
        with self._lock:
            return self._rooms.get(sid)

    def unbind(self, sid: str) -> str | None:
        with self._lock:
            return self._rooms.pop(sid, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
