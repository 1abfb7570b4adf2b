"""Borrow guards handed out by the peek operations."""

from types import TracebackType
from typing import TYPE_CHECKING, Generic

from rclist.cell import Ref, RefMut
from rclist.errors import ReleasedReferenceError
from rclist.rc import Rc
from rclist.types import T

if TYPE_CHECKING:
    from rclist.cell import RefCell
    from rclist.linkedlist import Node


class PeekGuard(Generic[T]):
    """
    Read-only access to the element of one node.

    Holds a clone of the node's Rc and a shared borrow of its cell, never
    the list. Popping the node while the guard is alive fails.
    """

    __slots__ = ("_rc", "_ref")

    def __init__(self, rc: "Rc[RefCell[Node[T]]]") -> None:
        self._ref: Ref[Node[T]] | None = None
        self._rc: Rc[RefCell[Node[T]]] | None = None
        # Borrow first so a conflict leaves the strong count untouched
        self._ref = rc.get().borrow()
        self._rc = rc.clone()

    @property
    def value(self) -> T:
        if self._ref is None:
            raise ReleasedReferenceError("Peek guard used after release")
        return self._ref.value.elem

    @property
    def released(self) -> bool:
        return self._ref is None

    def release(self) -> None:
        """Give the node back. Safe to call more than once."""
        if self._ref is not None:
            self._ref.release()
            self._ref = None
        if self._rc is not None:
            self._rc.drop()
            self._rc = None

    def __enter__(self) -> "PeekGuard[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __del__(self) -> None:
        self.release()

    def __repr__(self) -> str:
        if self._ref is None:
            return "PeekGuard(<released>)"
        return f"PeekGuard({self.value!r})"


class PeekMutGuard(Generic[T]):
    """Exclusive access to the element of one node; assign to ``value`` to replace it."""

    __slots__ = ("_rc", "_ref")

    def __init__(self, rc: "Rc[RefCell[Node[T]]]") -> None:
        self._ref: RefMut[Node[T]] | None = None
        self._rc: Rc[RefCell[Node[T]]] | None = None
        self._ref = rc.get().borrow_mut()
        self._rc = rc.clone()

    def _node(self) -> "Node[T]":
        if self._ref is None:
            raise ReleasedReferenceError("Peek guard used after release")
        return self._ref.value

    @property
    def value(self) -> T:
        return self._node().elem

    @value.setter
    def value(self, value: T) -> None:
        self._node().elem = value

    @property
    def released(self) -> bool:
        return self._ref is None

    def release(self) -> None:
        """Give the node back. Safe to call more than once."""
        if self._ref is not None:
            self._ref.release()
            self._ref = None
        if self._rc is not None:
            self._rc.drop()
            self._rc = None

    def __enter__(self) -> "PeekMutGuard[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __del__(self) -> None:
        self.release()

    def __repr__(self) -> str:
        if self._ref is None:
            return "PeekMutGuard(<released>)"
        return f"PeekMutGuard({self._ref.value.elem!r})"
