"""Immutable dataclasses returned by the MCP tools and resources.

CacheInfo describes the current size and bounds of a cache and
LookupResult carries the outcome of a single key lookup.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from core.interfaces import KeyValueCache


@dataclass(frozen=True)
class CacheInfo:
    """Point-in-time description of a cache.

    ttl_seconds is None when entries never expire.
    """

    size: int
    capacity: int
    ttl_seconds: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LookupResult:
    found: bool
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def describe_cache(cache: KeyValueCache) -> CacheInfo:
    return CacheInfo(
        size=len(cache),
        capacity=cache.capacity,
        ttl_seconds=getattr(cache, "ttl_seconds", None),
    )
