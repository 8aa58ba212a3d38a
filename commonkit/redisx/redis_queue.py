"""A priority queue on a Redis sorted set stored under ``QUEUE:<name>``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from commonkit.redisx.redis_client import Redis

_PREFIX = "QUEUE:"


@dataclass(frozen=True)
class ZSetData:
    """One member of a sorted set with its score."""

    value: str
    score: float


def _text(item: Any) -> str:
    if item is None:
        return ""
    return item.decode("utf-8") if isinstance(item, bytes) else str(item)


def _pairs(reply: Iterable[Any]) -> list[ZSetData]:
    items = iter([_text(item) for item in reply])
    return [ZSetData(value, float(score)) for value, score in zip(items, items)]


class PriorityQueue:
    """Members ordered by score."""

    def __init__(self, queue_name: str, client: Redis) -> None:
        self.name = _PREFIX + queue_name
        self._client = client

    def zadd(self, elem: str, score: int) -> None:
        self._client.exec_command("ZADD", self.name, score, elem)

    def zscore(self, elem: str) -> float:
        """Return the score of ``elem``, or 0.0 if it is not in the queue."""
        reply = self._client.exec_command("ZSCORE", self.name, elem)
        if reply is None:
            return 0.0
        return float(_text(reply))

    def zrem(self, elems: Iterable[str]) -> None:
        self._client.exec_command("ZREM", self.name, *elems)

    def zrangebyscore(self, min_score: int, max_score: int) -> list[ZSetData]:
        """Return members with ``min_score <= score <= max_score``, lowest first."""
        reply = self._client.exec_command(
            "ZRANGEBYSCORE", self.name, min_score, max_score, "WITHSCORES"
        )
        return _pairs(reply)

    def _top(self, command: str, num: int) -> list[ZSetData]:
        reply = self._client.exec_command(command, self.name, 0, num - 1, "WITHSCORES")
        return _pairs(reply)

    def top_min_score(self, num: int) -> list[ZSetData]:
        """Return the ``num`` members with the lowest scores, ascending."""
        return self._top("ZRANGE", num)

    def top_max_score(self, num: int) -> list[ZSetData]:
        """Return the ``num`` members with the highest scores, descending."""
        return self._top("ZREVRANGE", num)

    def clear(self) -> None:
        """Delete the whole queue."""
        self._client.exec_command("DEL", self.name)