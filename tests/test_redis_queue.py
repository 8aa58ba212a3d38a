from unittest import mock

import pytest
import redis

from commonkit.redisx.redis_client import Redis, RedisConfig
from commonkit.redisx.redis_queue import PriorityQueue, ZSetData


def _score(value):
    return ("%.17g" % value).encode()


class FakeServer:
    def __init__(self):
        self.zsets = {}
        self.calls = []

    def _sorted(self, name):
        members = self.zsets.get(name, {})
        return sorted(members.items(), key=lambda item: (item[1], item[0]))

    @staticmethod
    def _flat(items):
        out = []
        for member, score in items:
            out.extend([member.encode(), _score(score)])
        return out

    @staticmethod
    def _slice(items, start, stop):
        if stop < 0:
            stop += len(items)
        return items[start:stop + 1]

    def handle(self, command, *args):
        self.calls.append((command, *args))
        if command == "ZADD":
            name, score, member = args
            self.zsets.setdefault(name, {})[member] = float(score)
            return 1
        if command == "ZSCORE":
            name, member = args
            score = self.zsets.get(name, {}).get(member)
            return None if score is None else _score(score)
        if command == "ZREM":
            name, *members = args
            table = self.zsets.get(name, {})
            return sum(table.pop(m, None) is not None for m in members)
        if command == "ZRANGEBYSCORE":
            name, low, high, _ = args
            items = [(m, s) for m, s in self._sorted(name) if low <= s <= high]
            return self._flat(items)
        if command == "ZRANGE":
            name, start, stop, _ = args
            return self._flat(self._slice(self._sorted(name), start, stop))
        if command == "ZREVRANGE":
            name, start, stop, _ = args
            return self._flat(self._slice(self._sorted(name)[::-1], start, stop))
        if command == "DEL":
            return sum(self.zsets.pop(name, None) is not None for name in args)
        raise AssertionError(f"unexpected command {command}")


@pytest.fixture
def server():
    fake = FakeServer()

    def execute(_client, *args, **options):
        return fake.handle(*args)

    with mock.patch.object(redis.Redis, "execute_command", execute):
        yield fake


@pytest.fixture
def queue(server):
    q = PriorityQueue("jobs", Redis(RedisConfig(address=["localhost:6379"])))
    return q


@pytest.fixture
def filled(queue):
    for elem, score in [("c", 3), ("a", 1), ("b", 2), ("d", 4)]:
        queue.zadd(elem, score)
    return queue


def test_name_is_prefixed(queue, server):
    queue.zadd("job", 7)
    assert server.calls[-1] == ("ZADD", "QUEUE:jobs", 7, "job")
    assert queue.zscore("job") == 7.0
    assert server.calls[-1] == ("ZSCORE", "QUEUE:jobs", "job")


def test_zscore_round_trip(queue):
    queue.zadd("job", 7)
    assert queue.zscore("job") == 7.0


def test_zscore_missing_is_zero(queue):
    assert queue.zscore("missing") == 0.0


def test_zrem(filled):
    filled.zrem(["a", "b"])
    assert [item.value for item in filled.top_min_score(10)] == ["c", "d"]


def test_zrangebyscore(filled):
    assert filled.zrangebyscore(2, 3) == [ZSetData("b", 2.0), ZSetData("c", 3.0)]


def test_top_min_score_is_ascending(filled):
    result = filled.top_min_score(2)
    assert [item.value for item in result] == ["a", "b"]
    assert [item.score for item in result] == sorted(item.score for item in result)


def test_top_max_score_is_descending(filled):
    result = filled.top_max_score(2)
    assert [item.value for item in result] == ["d", "c"]


def test_top_zero_returns_everything(filled, server):
    assert len(filled.top_min_score(0)) == 4
    assert server.calls[-1] == ("ZRANGE", "QUEUE:jobs", 0, -1, "WITHSCORES")


def test_clear(filled, server):
    filled.clear()
    assert server.calls[-1] == ("DEL", "QUEUE:jobs")
    assert filled.top_min_score(10) == []