"""A local store whose contents are replaced wholesale from a data source."""

from __future__ import annotations

import threading
from typing import Any, Callable, Hashable, Mapping


class SyncStore:
    """Holds a snapshot of remote data that can be refreshed at any time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Mapping[Hashable, Any] = {}

    def sync(self, data_fn: Callable[[], Mapping[Hashable, Any]]) -> None:
        """Replace the snapshot with what ``data_fn`` returns."""
        with self._lock:
            self._data = dict(data_fn())

    def get(self, id: Hashable) -> Any:
        """Return the value for ``id``, or None when absent."""
        with self._lock:
            return self._data.get(id)