"""A lazy-loading container that creates each object on first use and keeps it."""

from __future__ import annotations

import threading
from typing import Any, Callable

Factory = Callable[[], Any]


def _check_factory(new: Factory | None) -> Factory:
    if new is None:
        raise ValueError("container.group: can't assign a nil to the new function")
    return new


class Group:
    """Creates objects by key with ``new`` only when first asked for, then caches them."""

    def __init__(self, new: Factory) -> None:
        self._new = _check_factory(new)
        self._objs: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        """Return the object for ``key``, creating it on first access."""
        try:
            return self._objs[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._objs:
                self._objs[key] = self._new()
            return self._objs[key]

    def reset(self, new: Factory) -> None:
        """Replace the factory and drop every object created so far."""
        factory = _check_factory(new)
        with self._lock:
            self._new = factory
        self.clear()

    def clear(self) -> None:
        """Drop every object created so far."""
        with self._lock:
            self._objs = {}

    def __len__(self) -> int:
        return len(self._objs)