"""Bounded first-in, first-out ring queue used for serial receive and transmit buffers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class RingQueue(Generic[T]):
    """A fixed-capacity FIFO queue.

    The ring keeps two slots in reserve to tell "full" from "empty", so a queue
    created with ``capacity`` N holds at most N - 2 items. Pushing onto a full
    queue drops the item.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[T] = deque()

    @property
    def capacity(self) -> int:
        """Number of slots in the ring."""
        return self._capacity

    @property
    def max_items(self) -> int:
        """Largest number of items the queue can hold at once."""
        return max(self._capacity - 2, 0)

    def is_full(self) -> bool:
        """Return True when no further item can be pushed."""
        return len(self._items) >= self.max_items

    def is_empty(self) -> bool:
        """Return True when the queue holds no items."""
        return not self._items

    def peek(self) -> T:
        """Return the oldest item without removing it."""
        if not self._items:
            raise IndexError("peek from an empty queue")
        return self._items[0]

    def pop(self) -> T:
        """Remove and return the oldest item."""
        if not self._items:
            raise IndexError("pop from an empty queue")
        return self._items.popleft()

    def push(self, item: T) -> bool:
        """Append ``item``; return False if the queue was full and it was dropped."""
        if self.is_full():
            return False
        self._items.append(item)
        return True

    def extend(self, items: Iterable[T]) -> int:
        """Push each of ``items`` in order; return how many were accepted."""
        return sum(1 for item in items if self.push(item))

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:
        return f"RingQueue(capacity={self._capacity}, items={list(self._items)!r})"