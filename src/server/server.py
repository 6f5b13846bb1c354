"""Server bootstrap for the LRU cache MCP service.

Builds the shared cache from configuration, creates the FastMCP instance,
registers tools and resources, and starts the MCP server (stdio transport).
When a TTL is configured the server lifespan runs the expiry sweeper.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from config import CACHE_CAPACITY, CACHE_TTL_SECONDS, LOG_LEVEL, MAX_LIST_ITEMS, SWEEP_INTERVAL_SECONDS
from core.cache import LRUCache
from core.expiry import ExpiringLRUCache
from core.interfaces import KeyValueCache
from core.log import setup_logging

from tools.cache_admin import register as register_cache_admin
from tools.cache_entries import register as register_cache_entries

from resources.cache_info import register_resources

log = logging.getLogger(__name__)


def build_cache() -> KeyValueCache:
    if CACHE_TTL_SECONDS > 0:
        log.info("Creating expiring cache (capacity=%d, ttl=%.3fs)", CACHE_CAPACITY, CACHE_TTL_SECONDS)
        return ExpiringLRUCache(CACHE_CAPACITY, ttl_seconds=CACHE_TTL_SECONDS)

    log.info("Creating cache (capacity=%d)", CACHE_CAPACITY)
    return LRUCache(CACHE_CAPACITY)


cache = build_cache()


@asynccontextmanager
async def lifespan(server) -> AsyncIterator[None]:
    if not isinstance(cache, ExpiringLRUCache):
        yield
        return

    task = asyncio.create_task(cache.run_sweeper(SWEEP_INTERVAL_SECONDS))
    try:
        yield
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


mcp = FastMCP("lru-cache-mcp", lifespan=lifespan)


def register_tools() -> None:
    register_cache_entries(mcp, cache=cache)
    register_cache_admin(mcp, cache=cache, max_items=MAX_LIST_ITEMS)


def register_all() -> None:
    register_tools()
    register_resources(mcp, cache=cache)


register_all()


def main() -> None:
    # stdout carries the stdio transport
    setup_logging(LOG_LEVEL)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
