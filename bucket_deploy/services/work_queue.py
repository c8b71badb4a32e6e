"""
Thread-shared work queue and progress counter for the upload workers.
"""
import threading
from typing import Generic, Iterable, Optional, Tuple, TypeVar

T = TypeVar('T')


class WorkQueue(Generic[T]):
    """
    Fixed pool of pending items handed out exactly once.

    Items are loaded at construction and never added afterwards. The
    backing sequence is private; workers only see ``pop``.
    """

    def __init__(self, items: Iterable[T]):
        self._items: Tuple[T, ...] = tuple(items)
        self._next = 0
        self._closed = False
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def pop(self) -> Tuple[Optional[T], bool]:
        """
        Remove and return the next item.

        Returns:
            ``(item, True)`` while items remain, ``(None, False)`` once the
            queue is drained or closed.
        """
        with self._lock:
            if self._closed or self._next >= len(self._items):
                return None, False
            item = self._items[self._next]
            self._next += 1
            return item, True

    def close(self) -> None:
        """Stop handing out items; workers exit on their next pop."""
        with self._lock:
            self._closed = True

    @property
    def popped_count(self) -> int:
        """Number of items removed so far."""
        with self._lock:
            return self._next

    def remaining_count(self) -> int:
        """Number of items not yet handed out. Approximate under contention."""
        if self._closed:
            return 0
        return len(self._items) - self._next


class ProgressCounter:
    """Shared counter bumped once per item handed to a worker."""

    def __init__(self, total: int):
        self.total = total
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Increment and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value
