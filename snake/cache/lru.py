"""A least-recently-used cache of fixed capacity."""

from __future__ import annotations

from collections import OrderedDict
from typing import Hashable

MISSING = -1


class LRU:
    """Keeps at most ``capacity`` entries, evicting the least recently used."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._data: OrderedDict[Hashable, object] = OrderedDict()

    def set(self, key: Hashable, value: object) -> None:
        """Store ``value`` under ``key`` and mark it most recently used."""
        self._data.pop(key, None)
        if len(self._data) >= self.capacity:
            self._data.popitem(last=False)
        self._data[key] = value

    def get(self, key: Hashable) -> object:
        """Return the value for ``key`` and mark it most recently used; -1 when absent."""
        if key not in self._data:
            return MISSING
        self._data.move_to_end(key)
        return self._data[key]

    def queue(self) -> list:
        """Keys from least to most recently used."""
        return list(self._data)

    def show_queue(self) -> str:
        """Print the queue from least to most recently used and return the line."""
        chain = " -> ".join(str(key) for key in self._data)
        line = f"Least {chain} Most" if chain else "Least Most"
        print(line)
        return line

    def __len__(self) -> int:
        return len(self._data)