import random
import threading

import pytest

from ekit.linked_queue import ConcurrentLinkedQueue
from ekit.priority_queue import EmptyQueueError


def queue_of(*values):
    q = ConcurrentLinkedQueue()
    for value in values:
        q.enqueue(value)
    return q


@pytest.mark.parametrize(
    "initial, value, want",
    [((), 123, [123]), ((123,), 234, [123, 234])],
)
def test_enqueue(initial, value, want):
    q = queue_of(*initial)
    q.enqueue(value)
    assert q.as_list() == want


def test_dequeue_empty():
    with pytest.raises(EmptyQueueError):
        queue_of().dequeue()


@pytest.mark.parametrize(
    "initial, want, remaining",
    [((123,), 123, []), ((123, 234), 123, [234])],
)
def test_dequeue(initial, want, remaining):
    q = queue_of(*initial)
    assert q.dequeue() == want
    assert q.as_list() == remaining


def test_enqueue_and_dequeue():
    q = queue_of(123, 234)
    assert q.dequeue() == 123
    q.enqueue(345)
    assert q.dequeue() == 234
    assert q.as_list() == [345]


def test_concurrent_producers_and_consumers():
    q = ConcurrentLinkedQueue()
    total = 10000
    received = []
    lock = threading.Lock()

    def producer():
        for _ in range(1000):
            q.enqueue(random.randint(0, 1 << 30))

    def consumer():
        while True:
            with lock:
                if len(received) >= total:
                    return
            try:
                value = q.dequeue()
            except EmptyQueueError:
                continue
            with lock:
                received.append(value)

    workers = [threading.Thread(target=producer) for _ in range(10)]
    workers += [threading.Thread(target=consumer) for _ in range(10)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    assert len(received) == total
    assert q.as_list() == []


def test_example():
    assert queue_of(10).dequeue() == 10