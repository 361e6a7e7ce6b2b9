# storefront/services/response_cache.py
import time
from typing import Any, Callable

from storefront.repos.store import KeyValueStore
from storefront.utils.settings import CACHE_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ResponseCache:
    """
    TTL cache for remote GET responses: read, check expiry, write.
    The expiry is stored next to the value so every store backend honours it.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.ttl = CACHE_TTL_SECONDS if ttl is None else ttl
        self.clock = clock

    def _key(self, name: str) -> str:
        return f"cache:{name}"

    def get(self, name: str) -> Any | None:
        entry = self.store.get(self._key(name))
        if not isinstance(entry, dict) or "expires_at" not in entry:
            return None

        if entry["expires_at"] <= self.clock():
            logger.info(f"Cache entry {name} expired")
            self.store.delete(self._key(name))
            return None

        return entry.get("value")

    def put(self, name: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        self.store.set(
            self._key(name),
            {"expires_at": self.clock() + self.ttl, "value": value},
            ttl=self.ttl,
        )

    def invalidate(self, name: str) -> None:
        self.store.delete(self._key(name))

    def get_or_fetch(self, name: str, fetch: Callable[[], Any]) -> Any:
        cached = self.get(name)
        if cached is not None:
            return cached

        value = fetch()
        self.put(name, value)
        return value
