import threading
import time

from azport.config import settings


class LoginThrottle:
    """
    In-memory failed-login tracker keyed by client IP.
    `max_attempts` failures inside `window_seconds` block the key for `block_seconds`.
    Good for single-instance deployments; state is lost on restart.
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: int,
        block_seconds: int,
        clock=time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.block_seconds = block_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._failures: dict[str, tuple[int, float]] = {}
        self._blocked_until: dict[str, float] = {}

    def retry_after(self, key: str) -> int:
        """
        Returns seconds until `key` may try again, 0 if it is not blocked.
        """
        now = self._clock()
        with self._lock:
            until = self._blocked_until.get(key)
            if until is None:
                return 0
            if until <= now:
                self._blocked_until.pop(key, None)
                self._failures.pop(key, None)
                return 0
            return max(1, int(until - now))

    def register_failure(self, key: str) -> int:
        """
        Record a failed attempt. Returns the block duration in seconds if this
        failure triggered a block, else 0.
        """
        now = self._clock()
        with self._lock:
            self._prune(now)
            count, last = self._failures.get(key, (0, 0.0))
            if now - last > self.window_seconds:
                count = 0
            count += 1
            self._failures[key] = (count, now)
            if count >= self.max_attempts:
                self._blocked_until[key] = now + self.block_seconds
                return self.block_seconds
            return 0

    def _prune(self, now: float) -> None:
        """Drop failure records past the window and expired blocks. Caller holds the lock."""
        for k, (_, last) in list(self._failures.items()):
            if now - last > self.window_seconds and k not in self._blocked_until:
                del self._failures[k]
        for k, until in list(self._blocked_until.items()):
            if until <= now:
                del self._blocked_until[k]
                self._failures.pop(k, None)

    def reset(self, key: str) -> None:
        with self._lock:
            self._failures.pop(key, None)
            self._blocked_until.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._failures.clear()
            self._blocked_until.clear()


login_throttle = LoginThrottle(
    max_attempts=settings.login_max_failed_attempts,
    window_seconds=settings.login_attempt_window_seconds,
    block_seconds=settings.login_block_seconds,
)
