# ekit

A small toolkit of generic containers and concurrency helpers.

- `ekit.hashmap.HashMap`: a map keyed by objects that subclass `Hashable` and implement `code()` and `equals()`. Keys that share a code go into the same bucket. It offers `put`, `get(key, default)`, `delete` (which returns the removed value and raises `KeyError` for a missing key), `keys`, `values`, `len()` and `in`.
- `ekit.maps`: `keys`, `values` and `keys_values` for plain mappings. `None` counts as an empty mapping.
- `ekit.treemap.TreeMap`: an ordered map driven by a comparator `compare(a, b)` that returns a negative number, zero or a positive number. It offers `put`, `get`, `remove`, and `keys`, `values` and `key_values` in ascending key order. `tree_map_from(compare, mapping)` builds one from an existing dict. If the comparator is `None`, the constructor raises `ComparatorMissingError`.
- `ekit.sets`: `MapSet`, a set of hashable values, and `TreeSet`, a set ordered by a comparator. Both offer `add`, `delete`, `exist` and `keys`.
- `ekit.priority_queue`: the `Queue` and `BlockingQueue` interfaces, the errors `EmptyQueueError` and `OutOfCapacityError`, and `ConcurrentPriorityQueue`. That is a thread-safe priority queue whose smallest element comes out first. It is unbounded when the capacity is zero or less.
- `ekit.linked_queue.ConcurrentLinkedQueue`: an unbounded, thread-safe FIFO queue with `enqueue`, `dequeue` and `as_list`.
- `ekit.delay_queue.DelayQueue`: a blocking queue for `Delayable` items. It only hands out an item once that item's `delay()` (in seconds) is zero or less.
- `ekit.task_pool.OnDemandBlockTaskPool`: a task pool that starts worker threads as demand requires and retires idle ones.

## Installation

```
pip install .
```

## Examples

```python
from ekit.treemap import TreeMap

def compare(a, b):
    return (a > b) - (a < b)

m = TreeMap(compare)
m.put(1, "one")
m.put(0, "zero")
print(m.keys())       # [0, 1]
print(m.get(1))       # one
```

```python
from ekit.priority_queue import ConcurrentPriorityQueue

q = ConcurrentPriorityQueue(10, lambda a, b: (a > b) - (a < b))
for n in (3, 2, 1):
    q.enqueue(n)
print([q.dequeue() for _ in range(3)])   # [1, 2, 3]
```

```python
import time
from ekit.delay_queue import Delayable, DelayQueue

class Job(Delayable):
    def __init__(self, due, name):
        self.due, self.name = due, name

    def delay(self):
        return self.due - time.monotonic()

q = DelayQueue(10)
q.enqueue(Job(time.monotonic() + 0.1, "soon"), timeout=1.0)
print(q.dequeue(timeout=1.0).name)   # soon
```

Blocking calls take a `timeout` in seconds. `None` waits without limit. A timeout of zero or less counts as already expired. A blocking call that runs out of time raises `TimeoutError`. Taking from an empty non-blocking queue raises `EmptyQueueError`. Adding to a full one raises `OutOfCapacityError`.

## Task pool

```python
from ekit.task_pool import OnDemandBlockTaskPool

pool = OnDemandBlockTaskPool(10, 100)
pool.start()
pool.submit(lambda cancelled: print("hello, world"))
done = pool.shutdown()
done.wait()
```

A task is either a `Task` subclass with a `run(cancelled)` method or a callable that takes the cancellation event. `shutdown_now()` sets that event.

The pool takes these keyword options:

- `core_go` and `max_go`: how far the number of workers may grow beyond `init_go`.
- `max_idle_time`: how many seconds an extra worker may stay idle before it leaves. The default is 10 seconds.
- `queue_backlog_rate`: how full the queue must be before another worker is started. It must lie in the range 0 to 1.
- `error_handler`: a callable that receives a `TaskPanicError` whenever a task raises.

`submit` blocks while the queue is full and raises `TimeoutError` if no room frees up within `timeout`. Tasks may be submitted before `start()`.

`shutdown()` returns a `threading.Event`, which is set once every queued and running task has finished. `shutdown_now()` returns the tasks that never started.

`state()` reports the current `PoolState`: `CREATED`, `RUNNING`, `CLOSING` or `STOPPED`. `num_workers()` reports how many worker threads the pool has. A call that the current state does not allow raises a subclass of `TaskPoolError`. An invalid argument to the constructor raises `ValueError`.

## What is not included

The package has no bounded FIFO blocking queue, of either the ring-buffer or the linked kind. `DelayQueue` is its only `BlockingQueue`. For a plain FIFO that waits for room or data, use the standard library's `queue.Queue`.

## Running the tests

```
pip install .[test]
pytest
```