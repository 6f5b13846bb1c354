import pytest

from core.cache import LRUCache
from core.errors import ValidationError
from core.expiry import ExpiringLRUCache
from tools import cache_admin as admin_tool


def _register(dummy_mcp, cache, max_items=None):
    admin_tool.register(dummy_mcp, cache=cache, max_items=max_items)
    return dummy_mcp.tools


@pytest.mark.asyncio
async def test_cache_len_keys_values(dummy_mcp):
    cache = LRUCache(4)
    cache.add("a", 1)
    cache.add("b", 2)
    tools = _register(dummy_mcp, cache)

    assert await tools["cache_len"]() == 2
    assert await tools["cache_keys"]() == ["b", "a"]
    assert await tools["cache_values"]() == [2, 1]


@pytest.mark.asyncio
async def test_cache_keys_values_respect_limit(dummy_mcp):
    cache = LRUCache(10)
    for i in range(5):
        cache.add(f"k{i}", i)
    tools = _register(dummy_mcp, cache, max_items=2)

    assert await tools["cache_keys"]() == ["k4", "k3"]
    assert await tools["cache_values"]() == [4, 3]


@pytest.mark.asyncio
async def test_cache_clear_returns_dropped_count(dummy_mcp):
    cache = LRUCache(4)
    cache.add("a", 1)
    cache.add("b", 2)
    tools = _register(dummy_mcp, cache)

    assert await tools["cache_clear"]() == 2
    assert len(cache) == 0
    assert await tools["cache_clear"]() == 0


@pytest.mark.asyncio
async def test_cache_change_capacity_shrinks_and_reports(dummy_mcp):
    cache = LRUCache(3)
    for key in ["a", "b", "c"]:
        cache.add(key, key)
    tools = _register(dummy_mcp, cache)

    out = await tools["cache_change_capacity"](capacity=1)

    assert out == {"size": 1, "capacity": 1, "ttl_seconds": None}
    assert cache.keys() == ["c"]


@pytest.mark.asyncio
async def test_cache_change_capacity_ignores_non_positive(dummy_mcp):
    cache = LRUCache(3)
    tools = _register(dummy_mcp, cache)

    out = await tools["cache_change_capacity"](capacity=0)

    assert out["capacity"] == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", ["many", None, True])
async def test_cache_change_capacity_validates(dummy_mcp, bad):
    tools = _register(dummy_mcp, LRUCache(3))

    with pytest.raises(ValidationError):
        await tools["cache_change_capacity"](capacity=bad)


@pytest.mark.asyncio
async def test_cache_info_reports_ttl(dummy_mcp):
    cache = ExpiringLRUCache(8, ttl_seconds=2.5)
    cache.add("a", 1)
    tools = _register(dummy_mcp, cache)

    assert await tools["cache_info"]() == {"size": 1, "capacity": 8, "ttl_seconds": 2.5}


def test_register_rejects_bad_limit(dummy_mcp):
    with pytest.raises(ValidationError):
        admin_tool.register(dummy_mcp, cache=LRUCache(1), max_items=-1)


@pytest.mark.asyncio
async def test_cache_clear_counts_in_one_call(dummy_mcp):
    calls = []

    class RecordingCache(LRUCache):
        def __len__(self):
            calls.append("len")
            return super().__len__()

    cache = RecordingCache(4)
    cache.add("a", 1)
    tools = _register(dummy_mcp, cache)

    assert await tools["cache_clear"]() == 1
    assert calls == []
