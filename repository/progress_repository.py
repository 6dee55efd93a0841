# repository/progress_repository.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional, Set
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from config.settings import settings
from core.identifiers import decode_key, encode_key, encode_pattern
from core.update_compiler import compile_update
from model.progress import Identifier, StateRecord, StoreOperation, Update
from repository.namespaces import CURRENT_FIELD, LABEL_FIELD, MAX_FIELD
from util.errors import ProgressError, StoreUnavailable

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _store_call(action: str) -> AsyncIterator[None]:
    # Transport/backend faults surface as StoreUnavailable; no retries here.
    try:
        yield
    except RedisError as e:
        logger.error("store.%s.error err=%s", action, type(e).__name__)
        raise StoreUnavailable(f"{action} failed: {e}") from e


def _text(raw: Optional[bytes]) -> Optional[str]:
    if raw is None:
        return None
    return raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else str(raw)


class ProgressRepository:
    """
    Flow:
    - Each task is three independent string keys (state/current/max), each
      with its own TTL, refreshed on every write.
    - There is no "task" entity in Redis; reads and listings rebuild it.
    """

    def __init__(
        self,
        redis: Optional[Redis] = None,
        ttl_seconds: int = settings.STATE_TTL_SECONDS,
    ) -> None:
        self._redis = redis
        self._ttl = int(ttl_seconds)

    async def _client(self) -> Redis:
        if self._redis is not None:
            return self._redis
        async with _store_call("connect"):
            return await get_redis()

    # ---------------- Writes ----------------

    async def execute(self, ops: Iterable[StoreOperation]) -> int:
        """Issue ops one by one; the first failure aborts the rest."""
        r = await self._client()
        done = 0
        for op in ops:
            async with _store_call(op.op):
                if op.op == "set":
                    await r.set(op.key, op.value, ex=op.ttl)
                else:
                    await r.delete(op.key)
            done += 1
        return done

    async def apply(self, update: Update) -> int:
        return await self.execute(compile_update(update, ttl=self._ttl))

    # ---------------- Reads ----------------

    async def _get(self, identifier: Identifier, field: str) -> Optional[str]:
        r = await self._client()
        key = encode_key(identifier.namespace, identifier.task, field)
        async with _store_call("get"):
            raw = await r.get(key)
        try:
            return _text(raw)
        except UnicodeDecodeError:
            # Same treatment as a non-integer current/max: unset, not a failed view.
            logger.warning(
                "store.value.not_utf8 ns=%s task=%s field=%s",
                identifier.namespace,
                identifier.task,
                field,
            )
            return None

    async def _get_int(self, identifier: Identifier, field: str) -> Optional[int]:
        v = await self._get(identifier, field)
        if v is None:
            return None
        try:
            return int(v)
        except ValueError:
            # Written by someone else; show it as unset rather than failing the view.
            logger.warning(
                "store.value.not_int ns=%s task=%s field=%s",
                identifier.namespace,
                identifier.task,
                field,
            )
            return None

    async def read_state(self, identifier: Identifier) -> StateRecord:
        """
        Three independent GETs. Any field may be missing (never written,
        deleted, expired); a store fault fails the whole read.
        """
        return StateRecord(
            label=await self._get(identifier, LABEL_FIELD),
            current=await self._get_int(identifier, CURRENT_FIELD),
            max=await self._get_int(identifier, MAX_FIELD),
        )

    # ---------------- Enumeration ----------------

    async def iter_tasks(
        self, namespace: str, task_prefix: str = ""
    ) -> AsyncIterator[Identifier]:
        """
        Lazily walk SCAN MATCH results, yielding each task at most once.

        Keys that fail to decode are skipped. The keyspace may change while
        scanning, so tasks created or removed meanwhile may or may not show up.
        """
        pattern = encode_pattern(namespace, task_prefix)
        r = await self._client()
        seen: Set[Identifier] = set()
        async with _store_call("scan"):
            async for raw in r.scan_iter(match=pattern):
                try:
                    ident = decode_key(_text(raw) or "").bare()
                except (ProgressError, UnicodeDecodeError):
                    logger.debug("store.scan.skip key=%r", raw)
                    continue
                if ident in seen:
                    continue
                seen.add(ident)
                yield ident

    async def list_tasks(self, namespace: str, task_prefix: str = "") -> Set[Identifier]:
        """Distinct tasks under namespace/prefix. Order is unspecified."""
        return {ident async for ident in self.iter_tasks(namespace, task_prefix)}
