"""Pool of scratch sets for pending emphasis characters.

The context check records which emphasis delimiters are open around the
current position. The set it fills lives only for one rule invocation, so
sets are pooled and handed out empty.

Thread Safety:
A pool is NOT thread-safe. Each thread needs its own PendingEmphasisCache;
AutoEmailRule keeps one per thread.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

DEFAULT_MAX_POOLED = 16


class PendingEmphasisCache:
    """Reusable ``set[str]`` instances.

    Usage:
        >>> cache = PendingEmphasisCache()
        >>> with cache.borrow() as pending:
        ...     pending.add("*")
        >>> cache.acquire()
        set()

    Invariants:
        - acquire() always returns an empty set
        - release() clears the set before pooling it

    """

    __slots__ = ("_free", "_max_pooled")

    def __init__(self, max_pooled: int = DEFAULT_MAX_POOLED) -> None:
        self._free: list[set[str]] = []
        self._max_pooled = max_pooled

    def __len__(self) -> int:
        """Number of idle sets in the pool."""
        return len(self._free)

    def acquire(self) -> set[str]:
        """Take an empty set from the pool (or a new one)."""
        if self._free:
            return self._free.pop()
        return set()

    def release(self, instance: set[str]) -> None:
        """Clear ``instance`` and return it to the pool."""
        instance.clear()
        if len(self._free) < self._max_pooled:
            self._free.append(instance)

    @contextmanager
    def borrow(self) -> Iterator[set[str]]:
        """Acquire a set for the duration of a ``with`` block.

        The set is released on every exit path, including exceptions.
        """
        instance = self.acquire()
        try:
            yield instance
        finally:
            self.release(instance)


__all__ = ["DEFAULT_MAX_POOLED", "PendingEmphasisCache"]
