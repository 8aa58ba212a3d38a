"""Pooled Redis client with string, list, expiry, msgpack and lock helpers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, TypeVar

import msgpack
import redis
from redis.sentinel import Sentinel, SentinelConnectionPool

from commonkit.redisx.options import SetOption, set_with_ex, set_with_nx

T = TypeVar("T")

_MASTER_NAME = "mymaster"
_DEFAULT_PORT = 6379

# Drop the lock if it is still held with ``value`` and wake one waiter by
# pushing a token onto the (empty) wait list, which expires after 5 seconds.
_RELEASE_AND_NOTIFY = """
if redis.call("GET", KEYS[1]) ~= ARGV[1] then
    return 0
end
redis.call("DEL", KEYS[1])
if redis.call("LLEN", KEYS[2]) ~= 0 then
    return 0
end
redis.call("RPUSH", KEYS[2], 1)
redis.call("EXPIRE", KEYS[2], 5)
return 1
"""


@dataclass
class RedisConfig:
    """Connection settings; durations are in seconds, zero meaning no limit."""

    address: list[str] = field(default_factory=list)
    password: str = ""
    database_id: int = 0
    max_idle: int = 0
    max_active: int = 0
    idle_timeout: float = 0.0
    connect_timeout: float = 0.0
    read_timeout: float = 0.0
    write_timeout: float = 0.0
    is_cluster: bool = False


def _optional_seconds(value: float) -> float | None:
    return float(value) if value else None


def _host_port(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, _DEFAULT_PORT
    return host, int(port)


def _text(reply: Any) -> str:
    if isinstance(reply, bytes):
        return reply.decode("utf-8")
    return str(reply)


def _strings(reply: Any) -> list[str]:
    return ["" if item is None else _text(item) for item in reply]


class Redis:
    """A Redis client backed by a connection pool, optionally found via Sentinel."""

    def __init__(self, cfg: RedisConfig | None) -> None:
        if cfg is None:
            raise ValueError("[redis]cfg is nil")
        if not cfg.address:
            raise ValueError("[redis]address is empty")
        self.cfg = cfg
        self._pool = self._build_pool(cfg)
        self._client = self.get_client()

    @staticmethod
    def _build_pool(cfg: RedisConfig) -> redis.ConnectionPool:
        socket_timeout = _optional_seconds(max(cfg.read_timeout, cfg.write_timeout))
        connect_timeout = _optional_seconds(cfg.connect_timeout)
        kwargs: dict[str, Any] = {
            "password": cfg.password or None,
            "db": cfg.database_id,
            "socket_timeout": socket_timeout,
            "socket_connect_timeout": connect_timeout,
            "health_check_interval": int(cfg.idle_timeout),
        }
        if cfg.max_active:
            kwargs["max_connections"] = cfg.max_active
        if cfg.is_cluster:
            sentinel = Sentinel(
                [_host_port(address) for address in cfg.address],
                socket_timeout=socket_timeout,
                socket_connect_timeout=connect_timeout,
            )
            return SentinelConnectionPool(_MASTER_NAME, sentinel, **kwargs)
        host, port = _host_port(cfg.address[0])
        return redis.ConnectionPool(host=host, port=port, **kwargs)

    def get_client(self) -> redis.Redis:
        """Return a client drawing connections from the pool, replies left raw."""
        client = redis.Redis(connection_pool=self._pool)
        client.response_callbacks.clear()
        return client

    def close_client(self, conn: redis.Redis) -> None:
        """Release a client obtained from ``get_client``."""
        conn.close()

    def get_pool(self) -> redis.ConnectionPool:
        return self._pool

    def close_pool(self) -> None:
        """Close every connection held by the pool."""
        if self._pool is not None:
            self._pool.disconnect()

    def exec_command(self, command: str, *args: Any) -> Any:
        """Run a raw command and return the raw reply."""
        return self._client.execute_command(command, *args)

    def set_exp_with_mp(self, key: str, value: Any, expire_milliseconds: int) -> None:
        """Store a dataclass instance as msgpack with an expiry in milliseconds."""
        if not dataclasses.is_dataclass(value) or isinstance(value, type):
            raise TypeError("[redis]value must be a dataclass instance")
        packed = msgpack.packb(dataclasses.asdict(value), use_bin_type=True)
        self.exec_command("SET", key, packed, "PX", expire_milliseconds)

    def get_with_mp(self, key: str, cls: type[T]) -> T:
        """Load a msgpack value stored by ``set_exp_with_mp`` as an instance of ``cls``."""
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            raise TypeError("[redis]cls must be a dataclass type")
        reply = self.exec_command("GET", key)
        if reply is None:
            raise KeyError(key)
        data = msgpack.unpackb(reply, raw=False)
        return cls(**data)

    def mget(self, keys: list[str]) -> list[bytes | None]:
        """Return the values of ``keys``; missing keys give None."""
        return list(self.exec_command("MGET", *keys))

    def set(self, key: str, value: Any, *args: SetOption) -> str | None:
        """SET with options from ``commonkit.redisx.options``.

        Returns the reply (usually "OK", or the old value with GET), or None
        when the server answers nil, e.g. an NX or XX condition was not met.
        """
        command: list[Any] = [key, value]
        for option in args:
            command.extend(option)
        reply = self.exec_command("SET", *command)
        return None if reply is None else _text(reply)

    def delete(self, *args: str) -> int:
        """Delete the given keys and return how many existed."""
        return int(self.exec_command("DEL", *args))

    def exists(self, key: str) -> int:
        return int(self.exec_command("EXISTS", key))

    def pexpire(self, key: str, milliseconds: int) -> int:
        return int(self.exec_command("PEXPIRE", key, milliseconds))

    def expire(self, key: str, seconds: int) -> int:
        return int(self.exec_command("EXPIRE", key, seconds))

    def pexpireat(self, key: str, milliseconds_timestamp: int) -> int:
        return int(self.exec_command("PEXPIREAT", key, milliseconds_timestamp))

    def pttl(self, key: str) -> int:
        """Remaining time to live in ms; -2 if missing, -1 if no expiry."""
        return int(self.exec_command("PTTL", key))

    def get(self, key: str) -> str:
        """Return the string at ``key``; raises KeyError if it does not exist."""
        reply = self.exec_command("GET", key)
        if reply is None:
            raise KeyError(key)
        return _text(reply)

    def keys(self, pattern: str) -> list[str]:
        """Return all keys matching a glob-style pattern."""
        return _strings(self.exec_command("KEYS", pattern))

    def brpop(self, key: str, timeout_seconds: int) -> list[str]:
        """Blocking right pop; returns [key, value] or raises TimeoutError."""
        reply = self.exec_command("BRPOP", key, timeout_seconds)
        if reply is None:
            raise TimeoutError(f"[redis]BRPOP on {key} timed out")
        return _strings(reply)

    def lpush(self, key: str, value: str) -> int:
        return int(self.exec_command("LPUSH", key, value))

    def rpop(self, key: str) -> str:
        """Pop from the right of a list; raises KeyError if it is empty."""
        reply = self.exec_command("RPOP", key)
        if reply is None:
            raise KeyError(key)
        return _text(reply)

    def try_get_lock(self, key: str, value: str, expire_seconds: int) -> bool:
        """Take a non-blocking lock via SET NX EX; True if it was acquired."""
        return self.set(key, value, set_with_ex(int(expire_seconds)), set_with_nx()) == "OK"

    def wait_for_get_lock(self, wait_key: str, expire_seconds: int) -> bool:
        """Block up to ``expire_seconds`` for a release notification on ``wait_key``."""
        try:
            self.brpop(wait_key, expire_seconds)
        except TimeoutError:
            return False
        return True

    def release_lock_and_rpush(self, key: str, wait_key: str, value: str) -> bool:
        """Release the lock held with ``value`` and notify one waiter.

        Returns True when the lock was released and a waiter token was pushed.
        """
        reply = self.exec_command("EVAL", _RELEASE_AND_NOTIFY, 2, key, wait_key, value)
        return bool(reply)