from __future__ import annotations

import logging

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """Just enough of ``redis.Redis`` for GET and SET with PX."""

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock or FakeClock()
        self.rows: dict[str, tuple[bytes, float | None]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail = False
        self.closed = False

    def get(self, key: str) -> bytes | None:
        self.calls.append(("get", key))
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379")
        row = self.rows.get(key)
        if row is None:
            return None
        value, expires_at = row
        if expires_at is not None and expires_at <= self.clock():
            del self.rows[key]
            return None
        return value

    def set(self, key: str, value: bytes | str, px: int | None = None) -> bool:
        self.calls.append(("set", key))
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379")
        if isinstance(value, str):
            value = value.encode("utf-8")
        expires_at = self.clock() + px / 1000 if px else None
        self.rows[key] = (value, expires_at)
        return True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_redis(clock: FakeClock) -> FakeRedis:
    return FakeRedis(clock)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logging.getLogger("cacheaside").setLevel(logging.NOTSET)
