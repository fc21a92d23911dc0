from __future__ import annotations

import random
import time
from threading import RLock

from .models import Player, Room


ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 4


def now_ms() -> int:
    return int(time.time() * 1000)


def normalize_room_code(code: str | None) -> str:
    return (code or "").strip().upper()


def is_valid_room_code(code: str | None) -> bool:
    c = normalize_room_code(code)
    return len(c) == ROOM_CODE_LENGTH and all(ch in ROOM_CODE_ALPHABET for ch in c)


def generate_room_code(rng: random.Random) -> str:
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


class RoomRegistry:
    """Owns every live room, keyed by its canonical (uppercase) code."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}
        self._rng = rng or random.Random()

    def create_room(self, host_id: str, host_name: str, host_avatar: str = "") -> Room:
        with self._lock:
            code = generate_room_code(self._rng)
            while code in self._rooms:
                code = generate_room_code(self._rng)

            host = Player(id=host_id, name=host_name, avatar=host_avatar, is_host=True)
            room = Room(code=code, host_id=host_id, players=[host], created_at_ms=now_ms())
            self._rooms[code] = room
            return room

    def find_room(self, code: str | None) -> Room | None:
        with self._lock:
            return self._rooms.get(normalize_room_code(code))

    def remove_room(self, code: str | None) -> bool:
        with self._lock:
            c = normalize_room_code(code)
            if c in self._rooms:
                del self._rooms[c]
                return True
            return False

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        with self._lock:
            return normalize_room_code(code) in self._rooms
