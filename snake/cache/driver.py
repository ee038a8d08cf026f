"""The cache driver interface and a process-wide default client."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

DEFAULT_EXPIRE_TIME = 24 * 60 * 60.0
"""Default lifetime of an entry, in seconds."""

DEFAULT_NOT_FOUND_EXPIRE_TIME = 60.0
"""Lifetime of a not-found placeholder, in seconds."""

NOT_FOUND_PLACEHOLDER = "*"


class CacheError(Exception):
    """A cache operation failed."""


class PlaceholderError(CacheError):
    """The key holds a not-found placeholder."""

    def __init__(self, message: str = "cache: placeholder") -> None:
        super().__init__(message)


class Driver(ABC):
    """A cache backend. Expirations are in seconds."""

    @abstractmethod
    def set(self, key: str, value: Any, expiration: float = 0) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value for ``key``, or None when absent."""

    @abstractmethod
    def multi_set(self, values: Mapping[str, Any], expiration: float = 0) -> None:
        """Store several values at once."""

    @abstractmethod
    def multi_get(self, keys: list[str]) -> dict[str, Any]:
        """Return the present values keyed by their cache keys."""

    @abstractmethod
    def delete(self, *args: str) -> None:
        """Remove the given keys."""

    @abstractmethod
    def incr(self, key: str, step: int = 1) -> int:
        """Add ``step`` to the counter at ``key`` and return the new value."""

    @abstractmethod
    def decr(self, key: str, step: int = 1) -> int:
        """Subtract ``step`` from the counter at ``key`` and return the new value."""

    @abstractmethod
    def set_cache_with_not_found(self, key: str) -> None:
        """Mark ``key`` as known to be missing for a short while."""


_client: Driver | None = None


def configure(driver: Driver | None) -> None:
    """Set the default client used by the module-level functions."""
    global _client
    _client = driver


def _require() -> Driver:
    if _client is None:
        raise CacheError("cache client is not configured")
    return _client


def set_value(key: str, value: Any, expiration: float = 0) -> None:
    """Store a value with the default client."""
    _require().set(key, value, expiration)


def get_value(key: str) -> Any:
    """Fetch a value with the default client."""
    return _require().get(key)


def multi_set(values: Mapping[str, Any], expiration: float = 0) -> None:
    """Store several values with the default client."""
    _require().multi_set(values, expiration)


def multi_get(keys: list[str]) -> dict[str, Any]:
    """Fetch several values with the default client."""
    return _require().multi_get(keys)


def delete(*args: str) -> None:
    """Remove keys with the default client."""
    _require().delete(*args)


def incr(key: str, step: int = 1) -> int:
    """Increment a counter with the default client."""
    return _require().incr(key, step)


def decr(key: str, step: int = 1) -> int:
    """Decrement a counter with the default client."""
    return _require().decr(key, step)


def set_cache_with_not_found(key: str) -> None:
    """Store a not-found placeholder with the default client."""
    _require().set_cache_with_not_found(key)