"""Cache key construction."""

from __future__ import annotations


def build_cache_key(key_prefix: str, key: str) -> str:
    """Join ``key_prefix`` and ``key`` with a colon; an empty prefix leaves the key as is."""
    if key == "":
        raise ValueError("[cache] key should not be empty")
    if key_prefix:
        return f"{key_prefix}:{key}"
    return key