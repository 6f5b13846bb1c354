from __future__ import annotations

from core.errors import ValidationError


def normalize_key(key: str) -> str:
    # Keys are opaque to the cache, but the tools refuse blank ones
    if key is None or not str(key).strip():
        raise ValidationError("key must be non-empty")
    return str(key)


def normalize_capacity(capacity: int) -> int:
    if isinstance(capacity, bool):
        raise ValidationError("capacity must be an integer")
    try:
        return int(capacity)
    except (TypeError, ValueError) as e:
        raise ValidationError("capacity must be an integer") from e


def normalize_limit(limit: int) -> int:
    n = int(limit)
    if n <= 0:
        raise ValidationError("limit must be positive")
    return n
