"""Fixed-capacity, thread-safe LRU cache.

Entries live in an arena of nodes addressed by integer handles. A dict maps
each key to its handle and the nodes form a doubly linked list ordered from
most recently used (head) to least recently used (tail). Every public method
holds the instance lock for its whole duration.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from core.errors import InvalidCapacityError

T = TypeVar("T")

log = logging.getLogger(__name__)

# Sentinel handle for "no neighbour"
NIL = -1


@dataclass(slots=True)
class _Node(Generic[T]):
    key: str
    value: T
    prev: int = NIL
    next: int = NIL


class LRUCache(Generic[T]):
    """Bounded key/value store that evicts the least recently used entry.

    Touching an entry (insert, successful get, successful change_value)
    moves it to the front. Only ``add`` under pressure, ``change_capacity``
    shrinking and ``clear`` drop entries the caller did not name.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise InvalidCapacityError(f"Capacity must be at least 1, got {capacity}")

        self._capacity = int(capacity)
        self._lock = threading.Lock()

        self._nodes: List[Optional[_Node[T]]] = []
        self._free: List[int] = []
        self._index: Dict[str, int] = {}
        self._head = NIL
        self._tail = NIL

    @property
    def capacity(self) -> int:
        return self._capacity

    # ---- public operations ----

    def add(self, key: str, value: T) -> bool:
        """Insert a new entry; return False without touching anything if key exists."""
        with self._lock:
            if key in self._index:
                return False

            if len(self._index) >= self._capacity:
                self._evict_back()

            handle = self._alloc(key, value)
            self._link_front(handle)
            self._index[key] = handle
            return True

    def get(self, key: str) -> Tuple[Optional[T], bool]:
        """Return (value, True) and promote the entry, or (None, False) on a miss."""
        with self._lock:
            handle = self._index.get(key)
            if handle is None:
                return None, False

            self._move_to_front(handle)
            return self._node(handle).value, True

    def peek(self, key: str) -> Tuple[Optional[T], bool]:
        # Same as get but leaves the recency order alone
        with self._lock:
            handle = self._index.get(key)
            if handle is None:
                return None, False
            return self._node(handle).value, True

    def change_value(self, key: str, value: T) -> bool:
        """Overwrite the value of an existing entry and promote it."""
        with self._lock:
            handle = self._index.get(key)
            if handle is None:
                return False

            self._node(handle).value = value
            self._move_to_front(handle)
            return True

    def remove(self, key: str) -> bool:
        with self._lock:
            handle = self._index.pop(key, None)
            if handle is None:
                return False

            self._unlink(handle)
            self._release(handle)
            return True

    def clear(self) -> int:
        """Drop every entry and return how many were dropped."""
        with self._lock:
            dropped = len(self._index)
            self._nodes.clear()
            self._free.clear()
            self._index.clear()
            self._head = NIL
            self._tail = NIL
            return dropped

    def change_capacity(self, capacity: int) -> None:
        """Resize the cache.

        Non-positive values are ignored. Growing never evicts; shrinking
        evicts least recently used entries until the new bound holds.
        """
        with self._lock:
            if capacity <= 0:
                log.debug("Ignoring non-positive capacity change: %s", capacity)
                return

            capacity = int(capacity)
            if capacity >= self._capacity:
                self._capacity = capacity
                return

            self._capacity = capacity
            evicted = 0
            while len(self._index) > capacity:
                self._evict_back()
                evicted += 1

            if evicted:
                log.debug("Capacity lowered to %d, evicted %d entries", capacity, evicted)

    def keys(self) -> List[str]:
        with self._lock:
            return [node.key for node in self._iter_nodes()]

    def values(self) -> List[T]:
        with self._lock:
            return [node.value for node in self._iter_nodes()]

    def items(self) -> List[Tuple[str, T]]:
        # Snapshot, most recent first
        with self._lock:
            return [(node.key, node.value) for node in self._iter_nodes()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._index

    def __repr__(self) -> str:
        with self._lock:
            size = len(self._index)
        return f"{type(self).__name__}(size={size}, capacity={self._capacity})"

    # ---- arena / list bookkeeping (caller holds the lock) ----

    def _node(self, handle: int) -> _Node[T]:
        node = self._nodes[handle]
        assert node is not None, f"dangling handle {handle}"
        return node

    def _alloc(self, key: str, value: T) -> int:
        node = _Node(key=key, value=value)
        if self._free:
            handle = self._free.pop()
            self._nodes[handle] = node
            return handle

        self._nodes.append(node)
        return len(self._nodes) - 1

    def _release(self, handle: int) -> None:
        self._nodes[handle] = None
        self._free.append(handle)

    def _link_front(self, handle: int) -> None:
        node = self._node(handle)
        node.prev = NIL
        node.next = self._head

        if self._head != NIL:
            self._node(self._head).prev = handle
        self._head = handle

        if self._tail == NIL:
            self._tail = handle

    def _unlink(self, handle: int) -> None:
        node = self._node(handle)

        if node.prev != NIL:
            self._node(node.prev).next = node.next
        else:
            self._head = node.next

        if node.next != NIL:
            self._node(node.next).prev = node.prev
        else:
            self._tail = node.prev

        node.prev = NIL
        node.next = NIL

    def _move_to_front(self, handle: int) -> None:
        if handle == self._head:
            return
        self._unlink(handle)
        self._link_front(handle)

    def _evict_back(self) -> None:
        # Never called on an empty list
        handle = self._tail
        assert handle != NIL, "eviction from an empty cache"

        node = self._node(handle)
        self._unlink(handle)
        del self._index[node.key]
        self._release(handle)
        log.debug("Evicted least recently used key %r", node.key)

    def _iter_nodes(self):
        handle = self._head
        while handle != NIL:
            node = self._node(handle)
            yield node
            handle = node.next
