from __future__ import annotations
import heapq
from collections import deque
from typing import Any, Deque, List, Tuple

Entry = Tuple[float, Any]


class FifoQueue:
    """First in, first out. Priorities are carried but do not order."""

    def __init__(self) -> None:
        self._q: Deque[Entry] = deque()

    def push(self, item: Any, priority: float = 0) -> None:
        self._q.append((priority, item))

    def pop(self) -> Entry:
        return self._q.popleft()

    def __len__(self) -> int:
        return len(self._q)


class LifoStack:
    """Last in, first out: every push lands on top."""

    def __init__(self) -> None:
        self._s: List[Entry] = []

    def push(self, item: Any, priority: float = 0) -> None:
        self._s.append((priority, item))

    def pop(self) -> Entry:
        return self._s.pop()

    def __len__(self) -> int:
        return len(self._s)


class PriorityQueue:
    """Min-heap on priority; equal priorities pop in insertion order."""

    def __init__(self) -> None:
        self._h: List[Tuple[float, int, Any]] = []
        self._tiebreak = 0

    def push(self, item: Any, priority: float = 0) -> None:
        self._tiebreak += 1
        heapq.heappush(self._h, (priority, self._tiebreak, item))

    def pop(self) -> Entry:
        priority, _, item = heapq.heappop(self._h)
        return priority, item

    def __len__(self) -> int:
        return len(self._h)
