"""Caching of user base records in Redis."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from snake.cache.driver import CacheError
from snake.cache.encoding import JSONEncoding
from snake.cache.redis_cache import RedisCache
from snake.model.user import UserBaseModel

logger = logging.getLogger(__name__)

PREFIX_USER_BASE_CACHE_KEY = "snake:user:base:{}"


def _to_user(value: Any) -> UserBaseModel:
    if not isinstance(value, Mapping):
        raise CacheError("cached user is not an object")
    return UserBaseModel.from_dict(value)


class UserCache:
    """Stores UserBaseModel records as JSON; ``client`` is a Redis client."""

    def __init__(self, client: Any) -> None:
        self.cache = RedisCache(client, "", JSONEncoding(), _to_user)

    def get_user_base_cache_key(self, user_id: int) -> str:
        """The cache key of a user."""
        return PREFIX_USER_BASE_CACHE_KEY.format(user_id)

    def set_user_base_cache(
        self, user_id: int, user: UserBaseModel | None, duration: float = 0
    ) -> None:
        """Cache ``user``; a missing user or one without an id is skipped."""
        if user is None or user.id == 0:
            return
        self.cache.set(self.get_user_base_cache_key(user_id), user.to_dict(), duration)

    def get_user_base_cache(self, user_id: int) -> UserBaseModel | None:
        """The cached user, or None; PlaceholderError when marked as not found."""
        try:
            return self.cache.get(self.get_user_base_cache_key(user_id))
        except CacheError as exc:
            logger.warning("get err from redis, err: %s", exc)
            raise

    def multi_get_user_base_cache(self, user_ids: list[int]) -> dict[str, UserBaseModel]:
        """The cached users among ``user_ids``, keyed by cache key."""
        keys = [self.get_user_base_cache_key(user_id) for user_id in user_ids]
        return self.cache.multi_get(keys)

    def del_user_base_cache(self, user_id: int) -> None:
        """Remove a user from the cache."""
        self.cache.delete(self.get_user_base_cache_key(user_id))

    def set_cache_with_not_found(self, user_id: int) -> None:
        """Mark a user as known to be missing for a short while."""
        self.cache.set_cache_with_not_found(self.get_user_base_cache_key(user_id))