"""Unit tests for the binary min-heap priority queue."""

import random

from topohealth.graph.priority_queue import PriorityQueue


class TestPriorityQueue:
    """Tests for PriorityQueue."""

    def test_empty(self):
        pq = PriorityQueue()

        assert pq.is_empty()
        assert pq.size() == 0
        assert len(pq) == 0
        assert pq.dequeue() is None
        assert pq.peek() is None

    def test_lowest_priority_first(self):
        pq = PriorityQueue()
        pq.enqueue("B", 10)
        pq.enqueue("A", 5)
        pq.enqueue("C", 15)

        assert pq.peek().value == "A"
        assert [pq.dequeue().value for _ in range(3)] == ["A", "B", "C"]
        assert pq.is_empty()

    def test_peek_does_not_remove(self):
        pq = PriorityQueue()
        pq.enqueue("x", 1)

        assert pq.peek().priority == 1
        assert pq.size() == 1

    def test_duplicate_values(self):
        """Test that the same value can be queued with several priorities."""
        pq = PriorityQueue()
        pq.enqueue("n", 7)
        pq.enqueue("n", 3)

        first = pq.dequeue()
        assert (first.value, first.priority) == ("n", 3)
        assert pq.dequeue().priority == 7

    def test_heap_order_on_random_input(self):
        """Test that dequeue order matches a sort of the priorities."""
        rng = random.Random(1234)
        priorities = [rng.uniform(0, 1000) for _ in range(200)]

        pq = PriorityQueue()
        for i, p in enumerate(priorities):
            pq.enqueue(i, p)

        drained = []
        while not pq.is_empty():
            drained.append(pq.dequeue().priority)

        assert drained == sorted(priorities)

    def test_interleaved_operations(self):
        pq = PriorityQueue()
        pq.enqueue("a", 5)
        pq.enqueue("b", 1)
        assert pq.dequeue().value == "b"

        pq.enqueue("c", 3)
        pq.enqueue("d", 0)
        assert [pq.dequeue().value for _ in range(3)] == ["d", "c", "a"]
