"""A counting semaphore with non-blocking and timed acquisition."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta

_log = logging.getLogger(__name__)


class Semaphore:
    """Grants up to ``permits`` holders at a time."""

    def __init__(self, permits: int) -> None:
        self.permits = permits
        self._used = 0
        self._cond = threading.Condition()

    def _take(self, blocking: bool, timeout: float | None = None) -> bool:
        with self._cond:
            if not blocking:
                ready = self._used < self.permits
            else:
                ready = self._cond.wait_for(lambda: self._used < self.permits, timeout)
            if ready:
                self._used += 1
            return ready

    def acquire(self) -> None:
        """Block until a permit is available and take it."""
        self._take(True)
        _log.info("Semaphore acquire success, available permits: %d.", self.available_permits())

    def release(self) -> None:
        """Return a permit; raises RuntimeError if none is held."""
        with self._cond:
            if self._used == 0:
                raise RuntimeError("semaphore released more often than acquired")
            self._used -= 1
            self._cond.notify()
        _log.info("Semaphore release success, available permits: %d.", self.available_permits())

    def try_acquire(self) -> bool:
        """Take a permit if one is free right now."""
        return self._take(False)

    def try_acquire_on_time(self, timeout: float | timedelta) -> bool:
        """Wait up to ``timeout`` (seconds or timedelta) for a permit."""
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
        return self._take(True, max(seconds, 0.0))

    def available_permits(self) -> int:
        with self._cond:
            return self.permits - self._used