"""Tests for iterative list teardown."""

import gc
import logging
import weakref
from collections.abc import Iterator

import pytest

from rclist import DoublyLinkedList


class Item:
    """Element type that supports weak references."""

    def __init__(self, n: int) -> None:
        self.n = n


def _fill(lst: DoublyLinkedList[Item], count: int) -> list["weakref.ref[Item]"]:
    """Push count fresh items to the right and return weak references to them."""
    refs = []
    for n in range(count):
        item = Item(n)
        refs.append(weakref.ref(item))
        lst.push_right(item)
    return refs


@pytest.fixture
def no_gc() -> Iterator[None]:
    """Disable the cycle collector so only reference counting frees objects."""
    gc.disable()
    try:
        yield
    finally:
        gc.enable()


def test_long_list() -> None:
    """Test dropping a very long list without running out of stack."""
    lst = DoublyLinkedList[str]()
    for i in range(100_000):
        lst.push_left(str(i))
    assert len(lst) == 100_000
    del lst


def test_long_list_close() -> None:
    """Test closing a very long list built from both ends."""
    lst = DoublyLinkedList[int]()
    for i in range(100_000):
        if i % 2:
            lst.push_left(i)
        else:
            lst.push_right(i)
    lst.close()
    assert len(lst) == 0
    assert lst.is_empty()
    assert lst.pop_left() is None


def test_long_list_close_frees_every_element(no_gc: None) -> None:
    """Test that the unlink loop alone frees a 100k-node chain."""
    lst = DoublyLinkedList[Item]()
    refs = _fill(lst, 100_000)
    assert len(lst) == 100_000
    assert refs[0]() is not None
    assert refs[-1]() is not None

    lst.close()
    assert len(lst) == 0
    assert all(ref() is None for ref in refs)


def test_close_frees_every_node(no_gc: None) -> None:
    """Test that closing breaks the prev/next cycles so elements are freed at once."""
    lst = DoublyLinkedList[Item]()
    refs = _fill(lst, 50)
    assert all(ref() is not None for ref in refs)

    lst.close()
    assert all(ref() is None for ref in refs)


def test_del_runs_teardown(no_gc: None) -> None:
    """Test that discarding the list releases its elements."""
    lst = DoublyLinkedList[Item]()
    refs = _fill(lst, 50)
    del lst
    assert all(ref() is None for ref in refs)


def test_context_manager(no_gc: None) -> None:
    """Test that leaving a with block tears the list down."""
    with DoublyLinkedList[Item]() as lst:
        refs = _fill(lst, 10)
        assert len(lst) == 10
    assert len(lst) == 0
    assert all(ref() is None for ref in refs)


def test_close_twice() -> None:
    """Test that closing an already empty list is harmless."""
    lst = DoublyLinkedList([1, 2, 3])
    lst.close()
    lst.close()
    assert lst.snapshot() == []

    # Still usable afterwards
    lst.push_left(4)
    assert lst.pop_right() == 4


def test_dropped_iterator_frees_rest(no_gc: None) -> None:
    """Test that a partially drained iterator releases what is left."""
    lst = DoublyLinkedList[Item]()
    refs = _fill(lst, 10)
    it = lst.into_iter()

    first = next(it)
    last = it.next_back()
    del it

    assert first.n == 0
    assert last.n == 9
    assert refs[0]() is first
    assert all(ref() is None for ref in refs[1:9])


def test_teardown_stops_at_borrowed_node(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a live guard keeps its node, and the teardown logs the early stop."""
    caplog.set_level(logging.DEBUG, logger="rclist.linkedlist")
    lst = DoublyLinkedList([1, 2, 3])

    guard = lst.peek_right()
    assert guard is not None
    lst.close()

    assert len(lst) == 0
    assert lst.peek_right() is None
    with guard:
        assert guard.value == 3
    assert "Teardown stopped" in caplog.text


def test_teardown_stops_at_shared_head(caplog: pytest.LogCaptureFixture) -> None:
    """Test that an outside handle on the head leaves the chain to its holder."""
    caplog.set_level(logging.DEBUG, logger="rclist.linkedlist")
    lst = DoublyLinkedList([1, 2])
    assert lst._head is not None
    extra = lst._head.clone()

    lst.close()
    assert lst.is_empty()
    assert "shared node" in caplog.text

    with extra.get().borrow() as head:
        assert head.value.elem == 1
        assert head.value.next is not None
    extra.drop()


def test_teardown_logs_released_count(caplog: pytest.LogCaptureFixture) -> None:
    """Test the debug summary after a full teardown."""
    caplog.set_level(logging.DEBUG, logger="rclist.linkedlist")
    DoublyLinkedList(range(5)).close()
    assert "Teardown released 5 nodes" in caplog.text
