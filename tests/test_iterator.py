"""Tests for the consuming bidirectional iterator."""

import pytest

from rclist import DoublyLinkedList, IntoIter


def test_into_iter() -> None:
    """Test draining from the left end."""
    lst = DoublyLinkedList[int]()
    lst.push_left(1)
    lst.push_left(2)

    it = lst.into_iter()
    assert isinstance(it, IntoIter)
    assert next(it) == 2
    assert next(it) == 1
    with pytest.raises(StopIteration):
        next(it)


def test_two_ended() -> None:
    """Test interleaving both ends until the fronts meet."""
    lst = DoublyLinkedList[int]()
    lst.push_left(1)
    lst.push_left(2)
    lst.push_left(3)

    it = lst.into_iter()
    assert next(it) == 3
    assert it.next_back() == 1
    assert next(it) == 2
    with pytest.raises(StopIteration):
        it.next_back()
    with pytest.raises(StopIteration):
        next(it)


def test_into_iter_empties_source() -> None:
    """Test that the source list is left empty and reusable."""
    lst = DoublyLinkedList([1, 2, 3])
    it = lst.into_iter()

    assert len(lst) == 0
    assert lst.pop_left() is None

    lst.push_right(9)
    assert list(it) == [1, 2, 3]
    assert lst.snapshot() == [9]


def test_for_loop() -> None:
    """Test the Python iterator protocol."""
    it = DoublyLinkedList("xyz").into_iter()
    assert iter(it) is it
    assert [c for c in it] == ["x", "y", "z"]
    assert list(it) == []


def test_reversed() -> None:
    """Test draining from the right end with reversed()."""
    it = DoublyLinkedList([1, 2, 3, 4]).into_iter()
    assert next(it) == 1
    assert list(reversed(it)) == [4, 3, 2]
    with pytest.raises(StopIteration):
        next(it)


def test_len_counts_remaining() -> None:
    """Test that len() reports the elements not yet drawn."""
    it = DoublyLinkedList(range(5)).into_iter()
    assert len(it) == 5
    next(it)
    it.next_back()
    assert len(it) == 3


def test_alternating_drain_yields_each_once() -> None:
    """Test that alternating ends yields every element exactly once."""
    it = DoublyLinkedList(range(11)).into_iter()
    front: list[int] = []
    back: list[int] = []

    for turn in range(20):
        try:
            if turn % 2 == 0:
                front.append(next(it))
            else:
                back.append(it.next_back())
        except StopIteration:
            break

    assert front == [0, 1, 2, 3, 4, 5]
    assert back == [10, 9, 8, 7, 6]
    assert sorted(front + back) == list(range(11))
    assert len(it) == 0
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        it.next_back()


def test_empty_into_iter() -> None:
    """Test iterating an empty list."""
    it = DoublyLinkedList[int]().into_iter()
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        it.next_back()
