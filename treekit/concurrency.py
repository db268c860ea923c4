"""Thread-safe facade over :class:`~treekit.ordered_tree.OrderedTree`.

The tree algorithms walk arbitrary ancestor chains, so locking is done for the
whole tree: mutations hold an exclusive lock while queries share a read lock.
"""

from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Generic, Iterable, Iterator, List, Optional

from .ordered_tree import Comparator, OrderedTree, T
from .render import render_lines

__all__ = ["ReadWriteLock", "SynchronizedOrderedTree"]


class ReadWriteLock:
    """Writer-preferring readers/writer lock.

    Any number of readers may hold the lock together; a writer holds it alone.
    Once a writer is waiting, new readers queue behind it. The lock is not
    reentrant.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writer_active or self._writers_waiting:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._condition:
                self._writer_active = False
                self._condition.notify_all()


class SynchronizedOrderedTree(Generic[T]):
    """``OrderedTree`` whose operations may be called from several threads."""

    def __init__(
        self,
        keys: Optional[Iterable[T]] = None,
        *,
        compare: Optional[Comparator] = None,
    ) -> None:
        self._tree: OrderedTree[T] = OrderedTree(keys, compare=compare)
        self._lock = ReadWriteLock()

    # Mutations -----------------------------------------------------------
    def insert(self, key: T) -> bool:
        with self._lock.write_locked():
            return self._tree.insert(key)

    def bulk_insert(self, keys: Iterable[T]) -> int:
        pending = list(keys)
        with self._lock.write_locked():
            return self._tree.bulk_insert(pending)

    def delete(self, key: T) -> bool:
        with self._lock.write_locked():
            return self._tree.delete(key)

    def invert(self) -> None:
        """Mirror the whole tree.

        Unlike :meth:`OrderedTree.invert` no node is returned; nodes must not
        escape the lock.
        """

        with self._lock.write_locked():
            self._tree.invert()

    def clear(self) -> None:
        with self._lock.write_locked():
            self._tree.clear()

    # Queries -------------------------------------------------------------
    def search(self, key: T) -> bool:
        with self._lock.read_locked():
            return self._tree.search(key)

    def minimum(self) -> Optional[T]:
        with self._lock.read_locked():
            return self._tree.minimum()

    def maximum(self) -> Optional[T]:
        with self._lock.read_locked():
            return self._tree.maximum()

    def height(self) -> int:
        with self._lock.read_locked():
            return self._tree.height()

    def count(self) -> int:
        with self._lock.read_locked():
            return self._tree.count()

    def is_balanced(self) -> bool:
        with self._lock.read_locked():
            return self._tree.is_balanced()

    def is_ordered(self) -> bool:
        with self._lock.read_locked():
            return self._tree.is_ordered()

    def traverse_in_order(self) -> List[T]:
        with self._lock.read_locked():
            return self._tree.traverse_in_order()

    def traverse_pre_order(self) -> List[T]:
        with self._lock.read_locked():
            return self._tree.traverse_pre_order()

    def traverse_post_order(self) -> List[T]:
        with self._lock.read_locked():
            return self._tree.traverse_post_order()

    def traverse_level_order(self) -> List[T]:
        with self._lock.read_locked():
            return self._tree.traverse_level_order()

    def render_lines(self) -> List[str]:
        with self._lock.read_locked():
            return render_lines(self._tree)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        return self.search(key)  # type: ignore[arg-type]
