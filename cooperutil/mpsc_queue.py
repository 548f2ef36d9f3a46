"""A multiple-producer, single-consumer FIFO queue."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class MpscQueue(Generic[T]):
    """FIFO queue; any thread may enqueue, a single thread dequeues."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()

    def enqueue(self, item: T) -> None:
        """Put an item at the back of the queue."""
        self._items.append(item)

    def dequeue(self) -> T:
        """Take the item at the front; raise IndexError if the queue is empty."""
        try:
            return self._items.popleft()
        except IndexError:
            raise IndexError("dequeue from an empty queue") from None

    def empty(self) -> bool:
        return not self._items

    def drain(self) -> Iterator[T]:
        """Yield and remove items until the queue is empty."""
        while True:
            try:
                yield self._items.popleft()
            except IndexError:
                return