"""Thread-safe list that adds at the front and removes by value."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Iterator


class LinkedList:
    """Newest-first collection guarded by a lock."""

    def __init__(self) -> None:
        self._items: Deque[Any] = deque()
        self._lock = threading.Lock()

    def add(self, data: Any) -> None:
        """Put ``data`` at the head."""
        with self._lock:
            self._items.appendleft(data)

    def remove(self, data: Any) -> bool:
        """Remove the first element equal to ``data``; tell whether one was found."""
        with self._lock:
            try:
                self._items.remove(data)
            except ValueError:
                return False
            return True

    def clear(self) -> None:
        """Remove every element."""
        with self._lock:
            self._items.clear()

    def __iter__(self) -> Iterator[Any]:
        """Yield a snapshot of the elements, head first."""
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)