"""Counters kept in Redis, used for rate and repetition checks."""

from __future__ import annotations

import contextlib
from typing import Any

PREFIX_COUNTER = "snake:counter:{}"
DEFAULT_STEP = 1
DEFAULT_EXPIRATION = 600
"""Lifetime of a counter, in seconds."""


class Counter:
    """Counts events per identifier.

    ``client`` is a Redis client such as ``redis.Redis``.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_key(self, key: str) -> str:
        """The Redis key for ``key``."""
        return PREFIX_COUNTER.format(key)

    def set_counter(self, id_str: str, expiration: int = DEFAULT_EXPIRATION) -> int:
        """Add one to the counter, refresh its lifetime and return the new count."""
        key = self.get_key(id_str)
        count = int(self.client.incrby(key, DEFAULT_STEP))
        with contextlib.suppress(Exception):
            self.client.expire(key, int(expiration))
        return count

    def get_counter(self, id_str: str) -> int:
        """The current count; KeyError when there is no counter."""
        key = self.get_key(id_str)
        value = self.client.get(key)
        if value is None:
            raise KeyError(key)
        return int(value)

    def del_counter(self, id_str: str) -> int:
        """Remove the counter and return how many keys were removed."""
        return int(self.client.delete(self.get_key(id_str)))