# synccircle/client/query_cache.py

from typing import Any, Callable, Dict, Hashable
import threading

class _Entry:
    __slots__ = ('value', 'stale')

    def __init__(self, value):
        self.value = value
        self.stale = False


class QueryCache:
    """Process-local cache of API reads keyed by request path.

    ``invalidate`` keeps the value but forces the next ``fetch`` to reload;
    ``evict`` forgets the entry so nothing stale can be shown.
    """

    def __init__(self):
        self._entries: Dict[Hashable, _Entry] = {}
        self._lock = threading.RLock()

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def get(self, key, default=None):
        with self._lock:
            entry = self._entries.get(key)
            return entry.value if entry else default

    def set(self, key, value):
        with self._lock:
            self._entries[key] = _Entry(value)

    def is_stale(self, key) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is None or entry.stale

    def fetch(self, key, loader: Callable[[], Any]):
        """Cached value for ``key``, calling ``loader`` when missing or stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and not entry.stale:
                return entry.value
        # Loader runs unlocked; it may block on the network
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.stale = True

    def evict(self, key):
        with self._lock:
            self._entries.pop(key, None)

    def clear(self):
        with self._lock:
            self._entries.clear()
