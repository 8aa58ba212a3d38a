from unittest import mock

import pytest
import redis

from commonkit.redisx.redis_client import Redis, RedisConfig
from commonkit.redisx.redis_hash import Hash


class FakeServer:
    def __init__(self):
        self.hashes = {}
        self.calls = []

    def handle(self, command, *args):
        self.calls.append((command, *args))
        if command == "HSET":
            name, field, value = args
            self.hashes.setdefault(name, {})[field] = str(value).encode()
            return 1
        if command == "HGET":
            name, field = args
            return self.hashes.get(name, {}).get(field)
        if command == "HDEL":
            name, *fields = args
            table = self.hashes.get(name, {})
            return sum(table.pop(field, None) is not None for field in fields)
        if command == "DEL":
            return sum(self.hashes.pop(name, None) is not None for name in args)
        raise AssertionError(f"unexpected command {command}")


@pytest.fixture
def server():
    fake = FakeServer()

    def execute(_client, *args, **options):
        return fake.handle(*args)

    with mock.patch.object(redis.Redis, "execute_command", execute):
        yield fake


@pytest.fixture
def table(server):
    return Hash("users", Redis(RedisConfig(address=["localhost:6379"])))


def test_name_is_prefixed(table, server):
    table.hset("f", "v")
    assert server.calls[-1] == ("HSET", "HASH:users", "f", "v")
    assert table.hget("f") == "v"
    assert server.calls[-1] == ("HGET", "HASH:users", "f")


def test_hset_hget_round_trip(table):
    table.hset("name", "value")
    assert table.hget("name") == "value"


def test_hget_missing_raises(table):
    with pytest.raises(KeyError):
        table.hget("missing")


def test_hdel_removes_fields(table):
    table.hset("a", "1")
    table.hset("b", "2")
    table.hdel(["a"])
    assert table.hget("b") == "2"
    with pytest.raises(KeyError):
        table.hget("a")


def test_hdel_empty_sends_nothing(table, server):
    table.hset("a", "1")
    server.calls.clear()
    table.hdel([])
    assert server.calls == []
    assert table.hget("a") == "1"


def test_clear(table, server):
    table.hset("a", "1")
    table.clear()
    assert server.calls[-1] == ("DEL", "HASH:users")
    with pytest.raises(KeyError):
        table.hget("a")