"""A Redis hash stored under the key ``HASH:<name>``."""

from __future__ import annotations

from typing import Iterable

from commonkit.redisx.redis_client import Redis

_PREFIX = "HASH:"


class Hash:
    """Field/value access to one Redis hash."""

    def __init__(self, hash_name: str, client: Redis) -> None:
        self.name = _PREFIX + hash_name
        self._client = client

    def hset(self, field: str, value: str) -> None:
        self._client.exec_command("HSET", self.name, field, value)

    def hget(self, field: str) -> str:
        """Return the value of ``field``; raises KeyError if it is not set."""
        reply = self._client.exec_command("HGET", self.name, field)
        if reply is None:
            raise KeyError(field)
        return reply.decode("utf-8") if isinstance(reply, bytes) else str(reply)

    def hdel(self, fields: Iterable[str]) -> None:
        """Remove the given fields; does nothing when there are none."""
        names = list(fields)
        if names:
            self._client.exec_command("HDEL", self.name, *names)

    def clear(self) -> None:
        """Delete the whole hash."""
        self._client.exec_command("DEL", self.name)