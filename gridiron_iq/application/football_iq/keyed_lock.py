import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Hashable


class KeyedLock:
    """One re-entrant lock per key, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = defaultdict(threading.RLock)

    @contextmanager
    def hold(self, key: Hashable):
        with self._guard:
            lock = self._locks[key]
        with lock:
            yield
