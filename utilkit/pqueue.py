"""A min priority queue whose keys never fall below the last key looked at."""

from __future__ import annotations

import heapq
from itertools import count
from typing import Any, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class PriorityQueue(Generic[K, V]):
    """Min-heap of (key, value) pairs.

    Reading the top key or value records it; later pushes with a smaller
    key are raised to that recorded key, keeping the output monotone.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[Any, int, V]] = []
        self._counter = count()
        self._last: Any = None

    def push(self, key: K, value: V) -> None:
        if self._last is not None and key < self._last:
            key = self._last
        heapq.heappush(self._heap, (key, next(self._counter), value))

    def _top(self) -> tuple[Any, int, V]:
        if not self._heap:
            raise IndexError("top of empty priority queue")
        top = self._heap[0]
        self._last = top[0]
        return top

    def top_key(self) -> K:
        return self._top()[0]

    def top_value(self) -> V:
        return self._top()[2]

    def pop(self) -> None:
        if not self._heap:
            raise IndexError("pop from empty priority queue")
        heapq.heappop(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)