import threading
import time
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

T = TypeVar("T")


class EventQueue(Generic[T]):
    """
    Bounded FIFO of pending input that a reader can block on.

    ``append`` evicts the oldest item once ``max_len`` is reached. Requeued
    items are never evicted and do not count against the bound.
    """

    def __init__(self, max_len: int = 100):
        self._buffer: Deque[T] = deque()
        self._max_len = max_len
        self._requeued = 0
        self._ready = threading.Condition(threading.Lock())

    def append(self, item: T):
        with self._ready:
            while len(self._buffer) - self._requeued >= self._max_len:
                del self._buffer[self._requeued]
            self._buffer.append(item)
            self._ready.notify()

    def push_front(self, item: T):
        """Requeue ``item`` so it is the next one returned by ``get``."""
        with self._ready:
            self._buffer.appendleft(item)
            self._requeued += 1
            self._ready.notify()

    def get(self, timeout: Optional[float] = None) -> Optional[T]:
        """Pop the oldest item, waiting up to ``timeout`` seconds; None on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._ready:
            while not self._buffer:
                if deadline is None:
                    self._ready.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self._ready.wait(remaining)
            self._requeued = max(self._requeued - 1, 0)
            return self._buffer.popleft()

    def clear(self) -> List[T]:
        with self._ready:
            dropped = list(self._buffer)
            self._buffer.clear()
            self._requeued = 0
        return dropped

    def snapshot(self) -> List[T]:
        with self._ready:
            return list(self._buffer)

    def __len__(self):
        with self._ready:
            return len(self._buffer)
