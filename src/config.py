"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (cache
capacity, TTL, sweep interval, list limits and log level).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Cache bounds
CACHE_CAPACITY = _env_int("LRU_CACHE_CAPACITY", 1024)

# TTL (0 disables expiry entirely)
CACHE_TTL_SECONDS = _env_float("LRU_CACHE_TTL_SECONDS", 0.0)
SWEEP_INTERVAL_SECONDS = _env_float("LRU_CACHE_SWEEP_INTERVAL", 1.0)

# Limits / output
MAX_LIST_ITEMS = _env_int("LRU_CACHE_MAX_LIST_ITEMS", 1000)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"
