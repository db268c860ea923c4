"""Tests for the thread-safe tree facade."""

from __future__ import annotations

import threading

import pytest

from treekit.concurrency import ReadWriteLock, SynchronizedOrderedTree


def test_concurrent_writers_keep_tree_consistent() -> None:
    tree: SynchronizedOrderedTree[int] = SynchronizedOrderedTree()
    workers = 4
    per_worker = 250

    def insert_range(offset: int) -> None:
        for value in range(offset, workers * per_worker, workers):
            assert tree.insert(value)

    threads = [threading.Thread(target=insert_range, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert len(tree) == workers * per_worker
    assert tree.traverse_in_order() == list(range(workers * per_worker))
    assert tree.is_ordered()


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader() -> None:
        with lock.read_locked():
            entered.set()

    with lock.read_locked():
        thread = threading.Thread(target=reader)
        thread.start()
        assert entered.wait(timeout=1)
    thread.join(timeout=1)


def test_writer_waits_for_active_reader() -> None:
    lock = ReadWriteLock()
    acquired = threading.Event()

    def writer() -> None:
        with lock.write_locked():
            acquired.set()

    with lock.read_locked():
        thread = threading.Thread(target=writer)
        thread.start()
        assert not acquired.wait(timeout=0.05)
    thread.join(timeout=1)
    assert acquired.is_set()


def test_reader_waits_for_active_writer() -> None:
    lock = ReadWriteLock()
    acquired = threading.Event()

    def reader() -> None:
        with lock.read_locked():
            acquired.set()

    with lock.write_locked():
        thread = threading.Thread(target=reader)
        thread.start()
        assert not acquired.wait(timeout=0.05)
    thread.join(timeout=1)
    assert acquired.is_set()


def test_synchronized_tree_delegates_operations() -> None:
    tree = SynchronizedOrderedTree([50, 10, 75, 5])
    assert tree.search(10)
    assert 75 in tree
    assert not tree.insert(50)
    assert tree.bulk_insert(iter([60, 5, 90])) == 2
    assert tree.minimum() == 5
    assert tree.maximum() == 90
    assert tree.height() == 2
    assert tree.count() == 6
    assert tree.is_balanced()
    assert tree.traverse_pre_order() == [50, 10, 5, 75, 60, 90]
    assert tree.traverse_post_order() == [5, 10, 60, 90, 75, 50]
    assert tree.traverse_level_order() == [50, 10, 75, 5, 60, 90]
    assert tree.render_lines()[0] == "50"

    assert tree.delete(10)
    assert tree.traverse_in_order() == [5, 50, 60, 75, 90]

    assert tree.invert() is None
    assert tree.traverse_in_order() == [90, 75, 60, 50, 5]
    assert not tree.is_ordered()

    tree.clear()
    assert len(tree) == 0


def test_synchronized_bulk_insert_rolls_back_on_comparator_error() -> None:
    tree = SynchronizedOrderedTree([5])
    with pytest.raises(TypeError):
        tree.bulk_insert([1, 9, "x"])  # type: ignore[list-item]
    assert tree.traverse_pre_order() == [5]
    # The write lock was released despite the error.
    assert tree.insert(7)
