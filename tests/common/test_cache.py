from src.farm_payroll.farm_payroll.common.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(max_entries=5, ttl_seconds=60, clock=clock)
    cache.set("workers", [1, 2])

    clock.now += 59
    assert cache.get("workers") == [1, 2]

    clock.now += 1
    assert cache.get("workers") is None
    assert len(cache) == 0


def test_oldest_entry_is_evicted_when_full():
    cache = TTLCache(max_entries=2, ttl_seconds=60, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_clear_and_empty_values():
    cache = TTLCache(max_entries=2, ttl_seconds=60, clock=FakeClock())
    cache.set("empty", [])
    assert cache.get("empty") == []

    cache.clear()
    assert cache.get("empty") is None
