import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.cache import NIL, LRUCache
from core.expiry import ExpiringLRUCache


def _assert_consistent(c: LRUCache):
    keys = []
    handle = c._head
    while handle != NIL:
        node = c._nodes[handle]
        keys.append(node.key)
        handle = node.next

    assert len(keys) == len(set(keys))
    assert set(keys) == set(c._index)
    assert len(c) == len(keys) <= c.capacity
    for key, handle in c._index.items():
        assert c._nodes[handle].key == key


def _worker(cache, seed: int, ops: int, key_space: int):
    rnd = random.Random(seed)
    for _ in range(ops):
        key = f"k{rnd.randrange(key_space)}"
        op = rnd.random()
        if op < 0.4:
            cache.add(key, seed)
        elif op < 0.7:
            cache.get(key)
        elif op < 0.85:
            cache.remove(key)
        elif op < 0.97:
            cache.change_value(key, -seed)
        else:
            cache.change_capacity(rnd.randint(1, 32))


@pytest.mark.parametrize("workers", [4, 16])
def test_concurrent_mixed_operations_keep_invariants(workers):
    c = LRUCache(16)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_worker, c, seed, 2000, 48) for seed in range(workers)]
        for f in futures:
            f.result()

    _assert_consistent(c)


def test_concurrent_adds_of_distinct_keys_are_not_lost():
    c = LRUCache(10_000)
    per_thread = 500
    threads = 8
    barrier = threading.Barrier(threads)

    def adder(tid: int):
        barrier.wait()
        for i in range(per_thread):
            assert c.add(f"t{tid}-{i}", i)

    with ThreadPoolExecutor(max_workers=threads) as pool:
        for f in [pool.submit(adder, t) for t in range(threads)]:
            f.result()

    assert len(c) == threads * per_thread
    _assert_consistent(c)


def test_concurrent_duplicate_add_has_single_winner():
    c = LRUCache(4)
    threads = 16
    barrier = threading.Barrier(threads)

    def adder(tid: int):
        barrier.wait()
        return c.add("shared", tid)

    with ThreadPoolExecutor(max_workers=threads) as pool:
        results = [f.result() for f in [pool.submit(adder, t) for t in range(threads)]]

    assert results.count(True) == 1
    winner = results.index(True)
    assert c.get("shared") == (winner, True)


def test_concurrent_operations_on_expiring_cache():
    c = ExpiringLRUCache(16, ttl_seconds=60.0)

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(_worker, c, seed, 1000, 48) for seed in range(8)]
        futures.append(pool.submit(lambda: [c.expire() for _ in range(200)]))
        for f in futures:
            f.result()

    _assert_consistent(c._inner)
    assert len(c) <= c.capacity
