"""MCP tools for whole-cache inspection and maintenance.

Registers 'cache_len', 'cache_keys', 'cache_values', 'cache_clear',
'cache_change_capacity' and 'cache_info'.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from config import MAX_LIST_ITEMS
from core.interfaces import KeyValueCache
from core.models import describe_cache
from tools.inputs import normalize_capacity, normalize_limit


def register(mcp: FastMCP, *, cache: KeyValueCache, max_items: Optional[int] = None) -> None:
    limit = normalize_limit(max_items or MAX_LIST_ITEMS)

    @mcp.tool(name="cache_len")
    async def cache_len() -> int:
        """Return the number of entries currently stored."""
        return len(cache)

    @mcp.tool(name="cache_keys")
    async def cache_keys() -> List[str]:
        """List the stored keys, most recently used first.

        At most the configured list limit is returned.
        """
        return cache.keys()[:limit]

    @mcp.tool(name="cache_values")
    async def cache_values() -> List[Any]:
        """List the stored values, most recently used first.

        At most the configured list limit is returned.
        """
        return cache.values()[:limit]

    @mcp.tool(name="cache_clear")
    async def cache_clear() -> int:
        """Drop every entry and return how many were dropped."""
        return cache.clear()

    @mcp.tool(name="cache_change_capacity")
    async def cache_change_capacity(capacity: int) -> Dict[str, Any]:
        """Change the maximum number of entries.

        Params:
          - capacity: new bound. Values <= 0 are ignored. A smaller bound
            evicts least recently used entries until the cache fits.

        Returns:
          {"size", "capacity", "ttl_seconds"} after the change.

        Raises:
          ValidationError when capacity is not an integer.
        """
        cache.change_capacity(normalize_capacity(capacity))
        return describe_cache(cache).to_dict()

    @mcp.tool(name="cache_info")
    async def cache_info() -> Dict[str, Any]:
        """Return {"size", "capacity", "ttl_seconds"} for the cache."""
        return describe_cache(cache).to_dict()
