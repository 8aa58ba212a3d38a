"""A bounded pool that runs submitted callables in threads."""

from __future__ import annotations

import queue
import threading
from typing import Callable


class WorkerPool:
    """Runs at most ``max_limit`` callables at once."""

    def __init__(self, max_limit: int) -> None:
        self.max_limit = max_limit
        self._tokens: queue.Queue[object] = queue.Queue()
        self._closed = False
        for _ in range(max_limit):
            self._tokens.put(object())

    def submit(self, fn: Callable[[], object]) -> None:
        """Wait for a free slot, then run ``fn`` in a new thread."""
        if self._closed:
            raise RuntimeError("pool is closed")
        token = self._tokens.get()

        def run() -> None:
            try:
                fn()
            finally:
                self._tokens.put(token)

        threading.Thread(target=run, daemon=True).start()

    def wait(self) -> None:
        """Wait until every submitted task has finished, then close the pool."""
        for _ in range(self.max_limit):
            self._tokens.get()
        self._closed = True

    def size(self) -> int:
        """Return the number of free slots."""
        return self._tokens.qsize()