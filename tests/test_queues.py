from collections import deque

import pytest
from hypothesis import given, strategies as st

from tagkit.queues import CircularQueue, QueueEmptyError, QueueFullError


@pytest.mark.parametrize("capacity", [0, -4, 3, 100, 1000])
def test_capacity_must_be_power_of_two(capacity):
    with pytest.raises(ValueError):
        CircularQueue(capacity)


def test_wraparound_scenario():
    queue = CircularQueue(1024 // 8)
    for i in range(1, 10):
        queue.enqueue(i)
    assert [queue.dequeue() for _ in range(1, 5)] == [1, 2, 3, 4]
    for i in range(1, 124):
        queue.enqueue(i)
    assert queue.is_full()
    assert len(queue) == queue.capacity
    assert list(queue) == list(range(5, 10)) + list(range(1, 124))
    with pytest.raises(QueueFullError):
        queue.enqueue(0)


def test_empty_queue_errors():
    queue = CircularQueue(4)
    assert queue.is_empty()
    with pytest.raises(QueueEmptyError):
        queue.dequeue()
    with pytest.raises(QueueEmptyError):
        queue.peek()


def test_peek_does_not_remove():
    queue = CircularQueue(2)
    queue.enqueue(123)
    assert queue.peek() == 123
    assert len(queue) == 1
    assert queue.dequeue() == 123
    queue.enqueue(456)
    assert queue.peek() == 456


@given(st.lists(st.one_of(st.integers(), st.none()), max_size=200))
def test_matches_bounded_fifo(operations):
    queue = CircularQueue(8)
    model = deque()
    for op in operations:
        if op is None:
            if model:
                assert queue.dequeue() == model.popleft()
            else:
                with pytest.raises(QueueEmptyError):
                    queue.dequeue()
        elif len(model) == 8:
            with pytest.raises(QueueFullError):
                queue.enqueue(op)
        else:
            queue.enqueue(op)
            model.append(op)
        assert list(queue) == list(model)
        assert len(queue) == len(model)