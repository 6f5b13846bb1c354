from __future__ import annotations


class LRUCacheError(Exception):
    """Base error for the cache package."""


class InvalidCapacityError(LRUCacheError):
    """Raised when a cache is created with a capacity below one."""


class InvalidTTLError(LRUCacheError):
    """Raised when an expiring cache is created with a non-positive TTL."""


class ValidationError(LRUCacheError):
    """Raised when user input is invalid."""
