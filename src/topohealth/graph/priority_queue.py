"""Priority queue (binary min-heap).

Lower priority values dequeue first. Ties are broken by heap
structure, not insertion order.

Time complexity: enqueue/dequeue O(log n); peek/is_empty/size O(1).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PriorityQueueItem(Generic[T]):
    """Value paired with its priority."""

    value: T
    priority: float


class PriorityQueue(Generic[T]):
    """Min-heap over an owned list with index-based swaps.

    Example:
        pq = PriorityQueue[str]()
        pq.enqueue("B", 10)
        pq.enqueue("A", 5)
        pq.dequeue().value  # "A"
    """

    def __init__(self) -> None:
        self._heap: list[PriorityQueueItem[T]] = []

    def enqueue(self, value: T, priority: float) -> None:
        """Add a value with the given priority."""
        self._heap.append(PriorityQueueItem(value, priority))
        self._bubble_up(len(self._heap) - 1)

    def dequeue(self) -> PriorityQueueItem[T] | None:
        """Remove and return the lowest-priority item, or None if empty."""
        if not self._heap:
            return None

        if len(self._heap) == 1:
            return self._heap.pop()

        smallest = self._heap[0]
        self._heap[0] = self._heap.pop()
        self._bubble_down(0)
        return smallest

    def peek(self) -> PriorityQueueItem[T] | None:
        """Return the lowest-priority item without removing it."""
        return self._heap[0] if self._heap else None

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _bubble_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._heap[index].priority >= self._heap[parent].priority:
                break
            self._swap(index, parent)
            index = parent

    def _bubble_down(self, index: int) -> None:
        length = len(self._heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index

            if left < length and self._heap[left].priority < self._heap[smallest].priority:
                smallest = left
            if right < length and self._heap[right].priority < self._heap[smallest].priority:
                smallest = right

            if smallest == index:
                break

            self._swap(index, smallest)
            index = smallest
