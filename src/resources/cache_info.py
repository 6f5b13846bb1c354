import json

from mcp.server.fastmcp import FastMCP

from core.interfaces import KeyValueCache
from core.models import describe_cache


def register_resources(mcp: FastMCP, *, cache: KeyValueCache) -> None:
    """
    Register read-only cache resources for the MCP server.
    """

    @mcp.resource(
        "lru://cache/info",
        mime_type="application/json",
        description="Current size, capacity and TTL of the cache",
    )
    def cache_info() -> str:
        return json.dumps(describe_cache(cache).to_dict())
