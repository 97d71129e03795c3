"""A task pool that grows and shrinks its worker threads with demand."""

from __future__ import annotations

import contextlib
import itertools
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Any, Callable, Union

from ekit.priority_queue import _Deadline

DEFAULT_MAX_IDLE_TIME = 10.0


class TaskPoolError(Exception):
    """Base class for errors raised by a task pool."""


class TaskPoolNotRunningError(TaskPoolError):
    """Raised when the pool has not been started yet."""

    def __init__(self) -> None:
        super().__init__("ekit: task pool is not running")


class TaskPoolClosingError(TaskPoolError):
    """Raised while the pool is shutting down."""

    def __init__(self) -> None:
        super().__init__("ekit: task pool is closing")


class TaskPoolStoppedError(TaskPoolError):
    """Raised once the pool has stopped."""

    def __init__(self) -> None:
        super().__init__("ekit: task pool is stopped")


class TaskPoolStartedError(TaskPoolError):
    """Raised when the pool is started a second time."""

    def __init__(self) -> None:
        super().__init__("ekit: task pool is already running")


class InvalidTaskError(TaskPoolError):
    """Raised when something that is not a task is submitted."""

    def __init__(self) -> None:
        super().__init__("ekit: invalid task")


class TaskPanicError(TaskPoolError):
    """Wraps an exception that escaped from a task."""


class PoolState(Enum):
    """The life-cycle states of a task pool."""

    CREATED = 1
    RUNNING = 2
    CLOSING = 3
    STOPPED = 4


class Task(ABC):
    """A unit of work run by a task pool."""

    @abstractmethod
    def run(self, cancelled: threading.Event) -> None:
        """Do the work; ``cancelled`` is set when the pool is shut down at once."""


TaskLike = Union[Task, Callable[[threading.Event], Any]]
ErrorHandler = Callable[[TaskPanicError], Any]


class OnDemandBlockTaskPool:
    """Task pool whose submitters block while the queue is full.

    It starts ``init_go`` workers, grows to ``core_go`` and ``max_go`` workers
    when the queue backs up, and lets the extra workers go after they have
    been idle for ``max_idle_time`` seconds.
    """

    def __init__(
        self,
        init_go: int,
        queue_size: int,
        *,
        core_go: int | None = None,
        max_go: int | None = None,
        max_idle_time: float = DEFAULT_MAX_IDLE_TIME,
        queue_backlog_rate: float = 0.0,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        if init_go < 1:
            raise ValueError("ekit: invalid argument: init_go must be greater than 0")
        if queue_size < 0:
            raise ValueError("ekit: invalid argument: queue_size must not be negative")
        core = init_go if core_go is None else core_go
        maximum = init_go if max_go is None else max_go
        if core != init_go and maximum == init_go:
            maximum = core
        elif core == init_go and maximum != init_go:
            core = maximum
        if not init_go <= core <= maximum:
            raise ValueError("ekit: invalid argument: need init_go <= core_go <= max_go")
        if not 0.0 <= queue_backlog_rate <= 1.0:
            raise ValueError("ekit: invalid argument: queue_backlog_rate must be within [0, 1.0]")

        self.init_go = init_go
        self.core_go = core
        self.max_go = maximum
        self.max_idle_time = max_idle_time
        self.queue_backlog_rate = queue_backlog_rate
        self._error_handler = error_handler

        self._queue_size = queue_size
        self._queue: deque[TaskLike] = deque()
        self._cond = threading.Condition()
        self._state = PoolState.CREATED
        self._total = 0
        self._running = 0
        self._idle = 0
        self._timeout_group: set[int] = set()
        self._ids = itertools.count(1)
        self._cancelled = threading.Event()
        self._done = threading.Event()

    def submit(self, task: TaskLike, timeout: float | None = None) -> None:
        """Queue ``task``, waiting up to ``timeout`` seconds for room.

        ``task`` is a Task or a callable taking the cancellation event.
        Raise TimeoutError if no room frees up in time.
        """
        if task is None or not (isinstance(task, Task) or callable(task)):
            raise InvalidTaskError()
        deadline = _Deadline(timeout)
        with self._cond:
            while True:
                if self._state is PoolState.CLOSING:
                    raise TaskPoolClosingError()
                if self._state is PoolState.STOPPED:
                    raise TaskPoolStoppedError()
                if len(self._queue) < self._queue_size + self._idle:
                    self._queue.append(task)
                    if self._state is PoolState.RUNNING and self._allow_new_worker():
                        self._spawn()
                    self._cond.notify_all()
                    return
                self._cond.wait(deadline.remaining())

    def start(self) -> None:
        """Start the workers; tasks submitted earlier begin to run."""
        with self._cond:
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            if self._state is PoolState.RUNNING:
                raise TaskPoolStartedError()
            needed = max(len(self._queue) - self.init_go, 0)
            count = self.init_go + min(needed, self.max_go - self.init_go)
            for _ in range(count):
                self._spawn()
            self._state = PoolState.RUNNING

    def shutdown(self) -> threading.Event:
        """Stop accepting tasks and let the queued ones finish.

        Return an event that is set once every task has finished.
        """
        with self._cond:
            if self._state is PoolState.CREATED:
                raise TaskPoolNotRunningError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            self._state = PoolState.CLOSING
            self._finish_if_drained()
            self._cond.notify_all()
            return self._done

    def shutdown_now(self) -> list[TaskLike]:
        """Stop at once, signal running tasks and return the tasks never started."""
        with self._cond:
            if self._state is PoolState.CREATED:
                raise TaskPoolNotRunningError()
            if self._state is PoolState.CLOSING:
                raise TaskPoolClosingError()
            if self._state is PoolState.STOPPED:
                raise TaskPoolStoppedError()
            self._state = PoolState.STOPPED
            self._cancelled.set()
            remaining = list(self._queue)
            self._queue.clear()
            self._cond.notify_all()
            return remaining

    def state(self) -> PoolState:
        """Return the current state of the pool."""
        with self._cond:
            return self._state

    def num_workers(self) -> int:
        """Return how many worker threads the pool has."""
        with self._cond:
            return self._total

    def _allow_new_worker(self) -> bool:
        if self._total >= self.max_go:
            return False
        if self._queue_size == 0:
            return True
        rate = len(self._queue) / self._queue_size
        return not (rate == 0 or rate < self.queue_backlog_rate)

    def _spawn(self) -> None:
        self._total += 1
        worker_id = next(self._ids)
        threading.Thread(target=self._work, args=(worker_id,), daemon=True).start()

    def _exit(self, worker_id: int) -> None:
        self._total -= 1
        self._timeout_group.discard(worker_id)
        self._finish_if_drained()
        self._cond.notify_all()

    def _finish_if_drained(self) -> None:
        if self._state is PoolState.CLOSING and not self._queue and self._running == 0:
            self._state = PoolState.STOPPED
            self._done.set()
            self._cond.notify_all()

    def _next_task(self, worker_id: int, idle_deadline: float | None) -> TaskLike | None:
        while True:
            if self._cancelled.is_set():
                self._exit(worker_id)
                return None
            if self._queue:
                task = self._queue.popleft()
                self._timeout_group.discard(worker_id)
                self._cond.notify_all()
                return task
            if self._state in (PoolState.CLOSING, PoolState.STOPPED):
                self._exit(worker_id)
                return None
            left = None
            if idle_deadline is not None:
                left = idle_deadline - time.monotonic()
                if left <= 0:
                    self._exit(worker_id)
                    return None
            self._idle += 1
            try:
                self._cond.wait(left)
            finally:
                self._idle -= 1

    def _execute(self, task: TaskLike) -> None:
        try:
            if isinstance(task, Task):
                task.run(self._cancelled)
            else:
                task(self._cancelled)
        except Exception as exc:
            error = TaskPanicError(f"ekit: task raised {exc!r}")
            error.__cause__ = exc
            if self._error_handler is not None:
                with contextlib.suppress(Exception):
                    self._error_handler(error)

    def _work(self, worker_id: int) -> None:
        idle_deadline: float | None = None
        with self._cond:
            while True:
                task = self._next_task(worker_id, idle_deadline)
                if task is None:
                    return
                idle_deadline = None
                self._running += 1
                self._cond.release()
                try:
                    self._execute(task)
                finally:
                    self._cond.acquire()
                self._running -= 1

                if self.core_go < self._total and len(self._queue) < self._total:
                    self._exit(worker_id)
                    return
                if self.init_go < self._total - len(self._timeout_group):
                    idle_deadline = time.monotonic() + self.max_idle_time
                    self._timeout_group.add(worker_id)
                self._finish_if_drained()