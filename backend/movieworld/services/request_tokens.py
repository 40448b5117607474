from threading import Lock


class RequestTokenTracker:
    """
    Hands out monotonically increasing tokens per request channel.

    A caller tags each request with `issue(channel)` and drops any response
    whose token is no longer `is_latest` for that channel, so a slow stale
    request cannot overwrite a newer one.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._counter = 0
        self._latest: dict[str, int] = {}

    def issue(self, channel: str = "default") -> int:
        with self._lock:
            self._counter += 1
            self._latest[channel] = self._counter
            return self._counter

    def latest(self, channel: str = "default") -> int:
        with self._lock:
            return self._latest.get(channel, 0)

    def is_latest(self, channel: str, token: int) -> bool:
        with self._lock:
            return token == self._latest.get(channel, 0)
