# tests/fakes.py

from __future__ import annotations

from collections.abc import AsyncIterator
from fnmatch import fnmatchcase

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """
    In-memory stand-in for redis.asyncio.Redis (bytes responses).

    - Only the calls the progress repository makes: get/set(ex=)/delete/scan_iter.
    - Expiry runs on a manual clock (`advance`), so TTL tests are instant.
    - `fail_after=n` lets n calls succeed, then every call raises
      ConnectionError; `fail_after=0` means the store is down.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.data: dict[bytes, tuple[bytes, float | None]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_after: int | None = None
        self.scanned = 0

    @staticmethod
    def _b(v: str | bytes | int) -> bytes:
        if isinstance(v, bytes):
            return v
        return str(v).encode("utf-8")

    def _record(self, name: str, key: str) -> None:
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise RedisConnectionError("fake redis is down")
        self.calls.append((name, key))

    def _live(self, key: bytes) -> bytes | None:
        item = self.data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and expires_at <= self.now:
            del self.data[key]
            return None
        return value

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def seed(self, key: str, value: str, ex: int | None = None) -> None:
        expires_at = None if ex is None else self.now + ex
        self.data[self._b(key)] = (self._b(value), expires_at)

    def ttl(self, key: str) -> float | None:
        item = self.data.get(self._b(key))
        if item is None or item[1] is None:
            return None
        return item[1] - self.now

    async def get(self, key: str) -> bytes | None:
        self._record("get", key)
        return self._live(self._b(key))

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self._record("set", key)
        self.seed(key, value, ex=ex)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            self._record("delete", key)
            if self._live(self._b(key)) is not None:
                del self.data[self._b(key)]
                removed += 1
        return removed

    async def scan_iter(
        self, match: str | None = None, count: int | None = None
    ) -> AsyncIterator[bytes]:
        self._record("scan", match or "*")
        for key in list(self.data):
            if self._live(key) is None:
                continue
            if match is None or fnmatchcase(key.decode("utf-8", "replace"), match):
                self.scanned += 1
                yield key
