"""Response Cache — expiry on read and prefix invalidation."""

from bff.infrastructure.response_cache import ResponseCache, property_key, transfer_key


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_hit_within_ttl():
    clock = FakeClock()
    cache = ResponseCache(ttl_seconds=30, clock=clock)
    cache.set("k", {"v": 1})
    clock.now = 29
    assert cache.get("k") == {"v": 1}


def test_expired_entry_evicted_on_read():
    clock = FakeClock()
    cache = ResponseCache(ttl_seconds=30, clock=clock)
    cache.set("k", {"v": 1})
    clock.now = 31
    assert cache.get("k") is None
    assert len(cache) == 0


def test_zero_ttl_disables_caching():
    cache = ResponseCache(ttl_seconds=0)
    cache.set("k", 1)
    assert cache.get("k") is None


def test_prefix_invalidation():
    cache = ResponseCache()
    cache.set(property_key("1"), 1)
    cache.set(property_key("2"), 2)
    cache.set(transfer_key("9"), 9)
    assert cache.invalidate("property:") == 2
    assert cache.get(transfer_key("9")) == 9


def test_invalidate_everything():
    cache = ResponseCache()
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.invalidate() == 2
    assert len(cache) == 0
