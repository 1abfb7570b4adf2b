"""Consuming iterator that drains a list from either end."""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Generic

from rclist.types import T

if TYPE_CHECKING:
    from rclist.linkedlist import DoublyLinkedList


class IntoIter(Generic[T]):
    """
    Owns a list and pops from it on demand.

    ``next()`` takes from the left end, ``next_back()`` from the right.
    The two may be interleaved freely; once the fronts meet both raise
    StopIteration. Not restartable.
    """

    def __init__(self, source: "DoublyLinkedList[T]") -> None:
        self._list = source

    def __iter__(self) -> "IntoIter[T]":
        return self

    def __next__(self) -> T:
        if not self._list:
            raise StopIteration
        return self._list.pop_left()  # type: ignore[return-value]

    def next_back(self) -> T:
        """Pop from the right end; raise StopIteration when exhausted."""
        if not self._list:
            raise StopIteration
        return self._list.pop_right()  # type: ignore[return-value]

    def __reversed__(self) -> Iterator[T]:
        while self._list:
            yield self._list.pop_right()  # type: ignore[misc]

    def __len__(self) -> int:
        """Return the number of elements not yet drawn."""
        return len(self._list)
