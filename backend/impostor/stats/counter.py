from __future__ import annotations

from threading import Lock

import httpx
import structlog

logger = structlog.get_logger()


class PlayCounter:
    """Counts started games.

    The local count always increments. When ``url`` is set each increment is
    also POSTed there; a failing remote is logged and otherwise ignored, so
    callers can run ``record_game`` as a background task without caring
    whether the counter service is reachable.
    """

    def __init__(self, url: str = "", timeout: float = 3.0, client: httpx.Client | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client
        self._lock = Lock()
        self._local = 0
        self._remote_total: int | None = None

    @property
    def games_played(self) -> int:
        with self._lock:
            if self._remote_total is not None:
                return max(self._remote_total, self._local)
            return self._local

    def record_game(self, room_code: str = "") -> int:
        with self._lock:
            self._local += 1
            local = self._local

        if not self.url:
            return local

        try:
            total = self._post_increment()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("play counter unavailable", room_code=room_code, error=str(e))
            return local

        with self._lock:
            if total is not None:
                self._remote_total = total
        return self.games_played

    def _post_increment(self) -> int | None:
        if self._client is not None:
            response = self._client.post(self.url, json={"increment": 1}, timeout=self.timeout)
        else:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.url, json={"increment": 1})
        response.raise_for_status()
        data = response.json() if response.content else {}
        total = data.get("gamesPlayed") if isinstance(data, dict) else None
        return total if isinstance(total, int) else None
