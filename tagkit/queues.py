"""Fixed-capacity ring buffer whose capacity is a power of two."""

from __future__ import annotations

from typing import Any, Iterator, List


class QueueFullError(OverflowError):
    """Raised when enqueuing into a full queue."""


class QueueEmptyError(IndexError):
    """Raised when reading from an empty queue."""


class CircularQueue:
    """First-in first-out queue over a power-of-two sized slot array."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0 or capacity & (capacity - 1):
            raise ValueError("capacity must be a positive power of two")
        self.capacity = capacity
        self._mask = capacity - 1
        self._slots: List[Any] = [None] * capacity
        self._front = 0
        self._rear = 0
        self._length = 0

    def is_empty(self) -> bool:
        return self._length == 0

    def is_full(self) -> bool:
        return self._length == self.capacity

    def enqueue(self, value: Any) -> None:
        """Append ``value`` at the rear."""
        if self.is_full():
            raise QueueFullError("Queue is full")
        self._slots[self._rear] = value
        self._rear = (self._rear + 1) & self._mask
        self._length += 1

    def dequeue(self) -> Any:
        """Remove and return the value at the front."""
        if self.is_empty():
            raise QueueEmptyError("Queue is empty")
        value = self._slots[self._front]
        self._slots[self._front] = None
        self._front = (self._front + 1) & self._mask
        self._length -= 1
        return value

    def peek(self) -> Any:
        """Return the value at the front without removing it."""
        if self.is_empty():
            raise QueueEmptyError("Queue is empty")
        return self._slots[self._front]

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        """Yield values from front to rear."""
        for offset in range(self._length):
            yield self._slots[(self._front + offset) & self._mask]