"""Unit tests for MemoryCache and NullCache."""

import pytest

from eventreg.cache import MemoryCache, NullCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.mark.unit
class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_get_missing_key(self, cache: MemoryCache) -> None:
        """Unknown keys miss."""
        assert cache.get("status:none") is None

    def test_set_then_get(self, cache: MemoryCache) -> None:
        """Stored value is returned while live."""
        cache.set("status:a", '{"x": 1}', ttl_seconds=300)
        assert cache.get("status:a") == '{"x": 1}'

    def test_entry_live_until_ttl(self, cache: MemoryCache, clock: FakeClock) -> None:
        """Entry is served just before expiry."""
        cache.set("status:a", "v", ttl_seconds=300)
        clock.advance(299.9)
        assert cache.get("status:a") == "v"

    def test_entry_expires_at_ttl(self, cache: MemoryCache, clock: FakeClock) -> None:
        """Entry misses once the TTL has passed and is dropped."""
        cache.set("status:a", "v", ttl_seconds=300)
        clock.advance(300)
        assert cache.get("status:a") is None
        assert len(cache) == 0

    def test_set_overwrites_and_resets_ttl(self, cache: MemoryCache, clock: FakeClock) -> None:
        """Setting again replaces the value and its expiry."""
        cache.set("status:a", "old", ttl_seconds=300)
        clock.advance(200)
        cache.set("status:a", "new", ttl_seconds=300)
        clock.advance(200)
        assert cache.get("status:a") == "new"

    def test_clear(self, cache: MemoryCache) -> None:
        """clear drops every entry."""
        cache.set("status:a", "v", ttl_seconds=300)
        cache.set("status:b", "v", ttl_seconds=300)
        cache.clear()
        assert len(cache) == 0


@pytest.mark.unit
class TestNullCache:
    """Tests for NullCache."""

    def test_always_misses(self) -> None:
        """Values are never stored."""
        cache = NullCache()
        cache.set("status:a", "v", ttl_seconds=300)
        assert cache.get("status:a") is None

    def test_close_is_noop(self) -> None:
        """close does nothing and does not raise."""
        NullCache().close()
