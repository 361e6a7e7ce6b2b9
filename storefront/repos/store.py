# storefront/repos/store.py
import json
import threading
import time
from typing import Any, Callable, Dict, Tuple

import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, STORE_BACKEND
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore:
    """
    Local durable storage for client state (cart, session, cached responses).
    Values are JSON documents, one writer per key.
    """

    def get(self, key: str) -> Any | None:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._data: Dict[str, Tuple[str, float | None]] = {}
        self._lock = threading.Lock()
        self.clock = clock

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None

            raw, expires_at = entry
            if expires_at is not None and expires_at <= self.clock():
                del self._data[key]
                return None

        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if ttl is not None and ttl <= 0:
            # already expired
            self.delete(key)
            return

        expires_at = self.clock() + ttl if ttl is not None else None
        raw = json.dumps(value)
        with self._lock:
            self._data[key] = (raw, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class RedisStore(KeyValueStore):
    def __init__(self, url: str | None = None, prefix: str = "storefront:", client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @redis_retry()
    def get(self, key: str) -> Any | None:
        raw = self.redis.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    @redis_retry()
    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if ttl is not None and ttl <= 0:
            # EX must be positive
            self.redis.delete(self._key(key))
            return

        #SET storefront:cart "[...]" EX ttl
        self.redis.set(
            name=self._key(key),
            value=json.dumps(value),
            ex=ttl,
        )

    @redis_retry()
    def delete(self, key: str) -> None:
        self.redis.delete(self._key(key))


def build_store(backend: str | None = None) -> KeyValueStore:
    backend = (backend or STORE_BACKEND).lower()

    if backend == "redis":
        logger.info(f"Using redis store at {REDIS_URL}")
        return RedisStore()
    if backend == "memory":
        logger.info("Using in-memory store")
        return MemoryStore()

    raise ValueError(f"Unknown store backend: {backend}")
