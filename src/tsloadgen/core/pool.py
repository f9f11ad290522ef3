"""Fixed-size free-list pool of reusable query objects.

Objects are preallocated up front and never created on demand. The
discipline is acquire, use, release: release() resets the object before it
goes back on the free list, so acquire() always hands out an empty object.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from tsloadgen.core.ports import Query

Q = TypeVar("Q", bound=Query)


class PoolExhaustedError(RuntimeError):
    """Raised when acquire() is called with every object already handed out."""


class QueryPool(Generic[Q]):
    """Free-list of preallocated query objects.

    Args:
        factory: Zero-argument constructor for the pooled type.
        size: Number of objects to preallocate.
    """

    def __init__(self, factory: Callable[[], Q], size: int = 1) -> None:
        if size < 1:
            raise ValueError("pool size must be at least 1")
        self._size = size
        self._free: list[Q] = [factory() for _ in range(size)]
        self._in_use: list[Q] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def available(self) -> int:
        """Number of objects currently on the free list."""
        return len(self._free)

    def acquire(self) -> Q:
        """Take an empty object off the free list.

        Raises:
            PoolExhaustedError: If every object is in use.
        """
        if not self._free:
            raise PoolExhaustedError(
                f"all {self._size} pooled queries are in use; release one first"
            )
        query = self._free.pop()
        self._in_use.append(query)
        return query

    def release(self, query: Q) -> None:
        """Reset query and put it back on the free list.

        Raises:
            ValueError: If query was not acquired from this pool.
        """
        for index, candidate in enumerate(self._in_use):
            if candidate is query:
                del self._in_use[index]
                break
        else:
            raise ValueError("query was not acquired from this pool")
        query.reset()
        self._free.append(query)
