import pytest

from twangpao.infrastructure.cache.memory_cache import MemoryCache


@pytest.mark.asyncio
async def test_entry_is_live_until_expiry(clock) -> None:
    cache = MemoryCache(clock=clock)
    await cache.set("0812345678:abc", "value", ttl=60)

    clock.advance(59)
    entry = await cache.get_entry("0812345678:abc")
    assert entry is not None
    assert entry.data == "value"
    assert entry.expiry == clock.now + 1

    clock.advance(1)
    assert await cache.get("0812345678:abc") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_set_overwrites_existing_entry(clock) -> None:
    cache = MemoryCache(clock=clock)
    await cache.set("key", "first", ttl=10)
    await cache.set("key", "second", ttl=10)

    assert await cache.get("key") == "second"
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_expired_entries_are_kept_until_read_or_purged(clock) -> None:
    cache = MemoryCache(clock=clock)
    await cache.set("short", 1, ttl=1)
    await cache.set("long", 2, ttl=100)

    clock.advance(5)
    assert len(cache) == 2
    assert cache.purge_expired() == 1
    assert len(cache) == 1
    assert await cache.exists("long") is True


@pytest.mark.asyncio
async def test_max_entries_evicts_least_recently_used(clock) -> None:
    cache = MemoryCache(max_entries=2, clock=clock)
    await cache.set("a", 1, ttl=100)
    await cache.set("b", 2, ttl=100)
    await cache.get("a")
    await cache.set("c", 3, ttl=100)

    assert await cache.get("b") is None
    assert await cache.get("a") == 1
    assert await cache.get("c") == 3


@pytest.mark.asyncio
async def test_delete_and_clear(clock) -> None:
    cache = MemoryCache(clock=clock)
    await cache.set("a", 1, ttl=100)
    await cache.set("b", 2, ttl=100)

    assert await cache.delete("a") is True
    assert await cache.delete("a") is False
    assert await cache.clear() == 1
    assert await cache.get("b") is None


def test_rejects_non_positive_max_entries() -> None:
    with pytest.raises(ValueError):
        MemoryCache(max_entries=0)
