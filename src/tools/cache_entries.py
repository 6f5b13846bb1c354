"""MCP tools that operate on single cache entries.

Registers 'cache_add', 'cache_get', 'cache_change_value' and
'cache_remove', each validating the key before delegating to the
injected KeyValueCache.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from core.interfaces import KeyValueCache
from core.models import LookupResult
from tools.inputs import normalize_key


def register(mcp: FastMCP, *, cache: KeyValueCache) -> None:
    @mcp.tool(name="cache_add")
    async def cache_add(key: str, value: Any = None) -> bool:
        """Insert a new entry at the front of the cache.

        Params:
          - key: entry key (required, non-blank).
          - value: any JSON value to store.

        Returns:
          True if the entry was added. False if the key already exists; the
          existing value is kept and its recency is not changed. Adding to a
          full cache evicts the least recently used entry first.

        Raises:
          ValidationError for a blank key.
        """
        return cache.add(normalize_key(key), value)

    @mcp.tool(name="cache_get")
    async def cache_get(key: str) -> Dict[str, Any]:
        """Look up an entry and mark it as most recently used.

        Returns:
          {"found": bool, "value": any}. A miss returns found=false and
          value=null and has no side effect.
        """
        value, found = cache.get(normalize_key(key))
        return LookupResult(found=found, value=value).to_dict()

    @mcp.tool(name="cache_change_value")
    async def cache_change_value(key: str, value: Any = None) -> bool:
        """Replace the value of an existing entry and mark it as most recently used.

        Returns False when the key is not present.
        """
        return cache.change_value(normalize_key(key), value)

    @mcp.tool(name="cache_remove")
    async def cache_remove(key: str) -> bool:
        """Delete an entry. Returns False when the key is not present."""
        return cache.remove(normalize_key(key))
