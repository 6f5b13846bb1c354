"""Core protocol definitions.

Defines the KeyValueCache protocol shared by LRUCache and
ExpiringLRUCache so the MCP tools can work with either one.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Tuple


class KeyValueCache(Protocol):
    """Contract for any bounded key/value cache exposed by the server."""

    @property
    def capacity(self) -> int:
        ...

    def add(self, key: str, value: Any) -> bool:
        ...

    def get(self, key: str) -> Tuple[Optional[Any], bool]:
        ...

    def change_value(self, key: str, value: Any) -> bool:
        ...

    def remove(self, key: str) -> bool:
        ...

    def clear(self) -> int:
        ...

    def change_capacity(self, capacity: int) -> None:
        ...

    def keys(self) -> List[str]:
        ...

    def values(self) -> List[Any]:
        ...

    def __len__(self) -> int:
        ...
