"""An in-process cache with per-entry expiry."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Mapping

from snake.cache.driver import (
    DEFAULT_NOT_FOUND_EXPIRE_TIME,
    NOT_FOUND_PLACEHOLDER,
    CacheError,
    Driver,
    PlaceholderError,
)
from snake.cache.encoding import Encoding, JSONEncoding, marshal, unmarshal
from snake.cache.key import build_cache_key

logger = logging.getLogger(__name__)

_ENCODE_ERRORS = (TypeError, ValueError, OverflowError)
_DECODE_ERRORS = (TypeError, ValueError, OSError, EOFError)


@dataclass
class _Entry:
    data: bytes | str
    expires_at: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryCache(Driver):
    """Keeps encoded values in memory.

    An expiration of 0 keeps the entry until it is removed; a negative one
    stores nothing.
    """

    def __init__(self, key_prefix: str = "", encoding: Encoding | None = None) -> None:
        self.key_prefix = key_prefix
        self.encoding = encoding if encoding is not None else JSONEncoding()
        self._store: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _key(self, key: str) -> str:
        try:
            return build_cache_key(self.key_prefix, key)
        except ValueError as exc:
            raise CacheError(f"build cache key err, key is {key!r}") from exc

    def _encode(self, value: Any) -> bytes:
        try:
            return marshal(self.encoding, value)
        except _ENCODE_ERRORS as exc:
            raise CacheError(f"marshal data err, value is {value!r}") from exc

    def _decode(self, key: str, cache_key: str, data: bytes) -> Any:
        try:
            return unmarshal(self.encoding, data)
        except _DECODE_ERRORS as exc:
            raise CacheError(
                f"unmarshal data error, key={key}, cacheKey={cache_key}, data is {data!r}"
            ) from exc

    def _lookup(self, cache_key: str) -> _Entry | None:
        entry = self._store.get(cache_key)
        if entry is None:
            return None
        if entry.expired(time.monotonic()):
            del self._store[cache_key]
            return None
        return entry

    def _put(self, cache_key: str, data: bytes | str, expiration: float) -> None:
        if expiration < 0:
            return
        expires_at = time.monotonic() + expiration if expiration > 0 else None
        with self._lock:
            self._store[cache_key] = _Entry(data, expires_at)

    def set(self, key: str, value: Any, expiration: float = 0) -> None:
        data = self._encode(value)
        self._put(self._key(key), data, expiration)

    def get(self, key: str) -> Any:
        cache_key = self._key(key)
        with self._lock:
            entry = self._lookup(cache_key)
        if entry is None:
            return None
        if entry.data == NOT_FOUND_PLACEHOLDER:
            raise PlaceholderError()
        return self._decode(key, cache_key, entry.data)

    def multi_set(self, values: Mapping[str, Any], expiration: float = 0) -> None:
        for key, value in values.items():
            try:
                self.set(key, value, expiration)
            except CacheError as exc:
                logger.warning("skip cache entry %r: %s", key, exc)

    def multi_get(self, keys: list[str]) -> dict[str, Any]:
        found: dict[str, Any] = {}
        for key in keys:
            cache_key = self._key(key)
            with self._lock:
                entry = self._lookup(cache_key)
            if entry is None or entry.data == NOT_FOUND_PLACEHOLDER:
                continue
            try:
                found[cache_key] = self._decode(key, cache_key, entry.data)
            except CacheError as exc:
                logger.warning("%s", exc)
        return found

    def delete(self, *args: str) -> None:
        for key in args:
            try:
                cache_key = self._key(key)
            except CacheError as exc:
                logger.warning("%s", exc)
                continue
            with self._lock:
                self._store.pop(cache_key, None)

    def incr(self, key: str, step: int = 1) -> int:
        cache_key = self._key(key)
        with self._lock:
            entry = self._lookup(cache_key)
            if entry is None:
                current, expires_at = 0, None
            else:
                if entry.data == NOT_FOUND_PLACEHOLDER:
                    raise CacheError(f"value at {cache_key} is not an integer")
                current = self._decode(key, cache_key, entry.data)
                expires_at = entry.expires_at
            if not isinstance(current, int) or isinstance(current, bool):
                raise CacheError(f"value at {cache_key} is not an integer")
            result = current + step
            self._store[cache_key] = _Entry(self._encode(result), expires_at)
        return result

    def decr(self, key: str, step: int = 1) -> int:
        return self.incr(key, -step)

    def set_cache_with_not_found(self, key: str) -> None:
        self._put(self._key(key), NOT_FOUND_PLACEHOLDER, DEFAULT_NOT_FOUND_EXPIRE_TIME)