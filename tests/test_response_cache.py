from storefront.services.response_cache import ResponseCache


class Clock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestResponseCache:
    def test_fetches_once_within_ttl(self, store):
        clock = Clock()
        cache = ResponseCache(store, ttl=60, clock=clock)
        calls = []

        def fetch():
            calls.append(1)
            return [{"_id": "p1"}]

        assert cache.get_or_fetch("products", fetch) == [{"_id": "p1"}]
        clock.now += 59
        assert cache.get_or_fetch("products", fetch) == [{"_id": "p1"}]
        assert len(calls) == 1

    def test_refetches_after_expiry(self, store):
        clock = Clock()
        cache = ResponseCache(store, ttl=60, clock=clock)
        cache.put("products", ["old"])

        clock.now += 60
        assert cache.get("products") is None
        assert cache.get_or_fetch("products", lambda: ["new"]) == ["new"]

    def test_invalidate(self, store):
        cache = ResponseCache(store, ttl=60)
        cache.put("products", ["x"])
        cache.invalidate("products")
        assert cache.get("products") is None

    def test_zero_ttl_disables_caching(self, store):
        cache = ResponseCache(store, ttl=0)
        cache.put("products", ["x"])
        assert cache.get("products") is None

    def test_ignores_foreign_values(self, store):
        store.set("cache:products", ["not", "an", "entry"])
        assert ResponseCache(store, ttl=60).get("products") is None
