"""A cache driver over a Redis client."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from snake.cache.driver import (
    DEFAULT_EXPIRE_TIME,
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
_PLACEHOLDER_BYTES = NOT_FOUND_PLACEHOLDER.encode()


def _millis(seconds: float) -> int:
    return max(1, int(round(seconds * 1000)))


class RedisCache(Driver):
    """Stores encoded values in Redis.

    ``client`` is a Redis client such as ``redis.Redis``; ``new_object``, when
    given, turns each decoded value into the object handed back.
    """

    def __init__(
        self,
        client: Any,
        key_prefix: str = "",
        encoding: Encoding | None = None,
        new_object: Callable[[Any], Any] | None = None,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix
        self.encoding = encoding if encoding is not None else JSONEncoding()
        self.new_object = new_object

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
            value = unmarshal(self.encoding, data)
        except _DECODE_ERRORS as exc:
            raise CacheError(
                f"unmarshal data error, key={key}, cacheKey={cache_key}, data is {data!r}"
            ) from exc
        return self.new_object(value) if self.new_object is not None else value

    def _store(self, cache_key: str, data: bytes | str, expiration: float) -> None:
        try:
            if expiration > 0:
                self.client.set(cache_key, data, px=_millis(expiration))
            else:
                self.client.set(cache_key, data)
        except Exception as exc:
            raise CacheError("redis set error") from exc

    def set(self, key: str, value: Any, expiration: float = 0) -> None:
        data = self._encode(value)
        cache_key = self._key(key)
        self._store(cache_key, data, expiration or DEFAULT_EXPIRE_TIME)

    def get(self, key: str) -> Any:
        cache_key = self._key(key)
        try:
            data = self.client.get(cache_key)
        except Exception as exc:
            raise CacheError(f"get data error from redis, key is {cache_key}") from exc
        if not data:
            return None
        if isinstance(data, str):
            data = data.encode()
        if data == _PLACEHOLDER_BYTES:
            raise PlaceholderError()
        return self._decode(key, cache_key, data)

    def multi_set(self, values: Mapping[str, Any], expiration: float = 0) -> None:
        if not values:
            return
        pairs: dict[str, bytes] = {}
        for key, value in values.items():
            try:
                pairs[self._key(key)] = self._encode(value)
            except CacheError as exc:
                logger.warning("skip cache entry %r: %s", key, exc)
        if not pairs:
            return
        expiration = expiration or DEFAULT_EXPIRE_TIME
        try:
            self.client.mset(pairs)
        except Exception as exc:
            raise CacheError("redis multi set error") from exc
        for cache_key in pairs:
            self.client.pexpire(cache_key, _millis(expiration))

    def multi_get(self, keys: list[str]) -> dict[str, Any]:
        if not keys:
            return {}
        cache_keys = [self._key(key) for key in keys]
        try:
            values = self.client.mget(cache_keys)
        except Exception as exc:
            raise CacheError(f"redis MGet error, keys is {keys!r}") from exc
        found: dict[str, Any] = {}
        for key, cache_key, data in zip(keys, cache_keys, values):
            if not data:
                continue
            if isinstance(data, str):
                data = data.encode()
            if data == _PLACEHOLDER_BYTES:
                continue
            try:
                found[cache_key] = self._decode(key, cache_key, data)
            except CacheError as exc:
                logger.warning("%s", exc)
        return found

    def delete(self, *args: str) -> None:
        cache_keys = []
        for key in args:
            try:
                cache_keys.append(self._key(key))
            except CacheError as exc:
                logger.warning("%s", exc)
        if not cache_keys:
            return
        try:
            self.client.delete(*cache_keys)
        except Exception as exc:
            raise CacheError(f"redis delete error, keys is {list(args)!r}") from exc

    def incr(self, key: str, step: int = 1) -> int:
        cache_key = self._key(key)
        try:
            return int(self.client.incrby(cache_key, step))
        except Exception as exc:
            raise CacheError(f"redis incr, key is {key!r}") from exc

    def decr(self, key: str, step: int = 1) -> int:
        cache_key = self._key(key)
        try:
            return int(self.client.decrby(cache_key, step))
        except Exception as exc:
            raise CacheError(f"redis decr, key is {key!r}") from exc

    def set_cache_with_not_found(self, key: str) -> None:
        self._store(self._key(key), NOT_FOUND_PLACEHOLDER, DEFAULT_NOT_FOUND_EXPIRE_TIME)