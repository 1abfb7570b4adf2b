"""Doubly-linked list built on reference-counted, borrow-checked links."""

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Generic, TypeAlias

from rclist.cell import RefCell
from rclist.errors import SharedReferenceError
from rclist.guards import PeekGuard, PeekMutGuard
from rclist.iterator import IntoIter
from rclist.rc import Rc
from rclist.types import D, T

log = logging.getLogger(__name__)


class Node(Generic[T]):
    """A node in the doubly-linked list."""

    __slots__ = ("elem", "prev", "next")

    def __init__(self, elem: T) -> None:
        self.elem = elem
        self.prev: Link[T] = None
        self.next: Link[T] = None

    @classmethod
    def new(cls, elem: T) -> "Rc[RefCell[Node[T]]]":
        """Allocate a detached node behind a fresh shared link."""
        return Rc(RefCell(cls(elem)))


# Optional shared, interior-mutable reference to a node
Link: TypeAlias = Rc[RefCell[Node[T]]] | None


class DoublyLinkedList(Generic[T]):
    """
    Doubly-linked list with push, pop and peek at both ends.

    Every link is an Rc handle, counted explicitly: the head slot and each
    ``next`` own one handle, the tail slot and each ``prev`` own another.
    An end node of a well-formed list therefore always has exactly two
    handles; anything above that is an outside holder.
    """

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._head: Link[T] = None
        self._tail: Link[T] = None
        self._size = 0
        if items is not None:
            for item in items:
                self.push_right(item)

    def push_left(self, elem: T) -> None:
        """Insert elem as the new head. O(1)."""
        new_head = Node.new(elem)
        old_head = self._head
        if old_head is None:
            self._tail = new_head.clone()
        else:
            with old_head.get().borrow_mut() as old:
                old.value.prev = new_head.clone()
            with new_head.get().borrow_mut() as new:
                new.value.next = old_head
        self._head = new_head
        self._size += 1

    def push_right(self, elem: T) -> None:
        """Insert elem as the new tail. O(1)."""
        new_tail = Node.new(elem)
        old_tail = self._tail
        if old_tail is None:
            self._head = new_tail.clone()
        else:
            with old_tail.get().borrow_mut() as old:
                old.value.next = new_tail.clone()
            with new_tail.get().borrow_mut() as new:
                new.value.prev = old_tail
        self._tail = new_tail
        self._size += 1

    def pop_left(self, *, default: D = None) -> T | D:  # type: ignore[assignment]
        """
        Remove and return the head element. O(1).

        Args:
            default: Returned when the list is empty

        Raises:
            BorrowMutError: If a peek guard on the head node is still alive
            SharedReferenceError: If another handle to the head node is alive
        """
        old_head = self._head
        if old_head is None:
            return default

        # Borrow before touching the list so a conflict leaves it intact
        with old_head.get().borrow_mut() as old:
            _check_detachable(old_head)
            new_head = old.value.next
            if new_head is None:
                tail = self._tail
                self._tail = None
                if tail is not None:
                    tail.drop()
            else:
                with new_head.get().borrow_mut() as new:
                    back = new.value.prev
                    new.value.prev = None
                if back is not None:
                    back.drop()
            old.value.next = None
        self._head = new_head
        self._size -= 1
        return old_head.try_unwrap().into_inner().elem

    def pop_right(self, *, default: D = None) -> T | D:  # type: ignore[assignment]
        """
        Remove and return the tail element. O(1).

        Args:
            default: Returned when the list is empty

        Raises:
            BorrowMutError: If a peek guard on the tail node is still alive
            SharedReferenceError: If another handle to the tail node is alive
        """
        old_tail = self._tail
        if old_tail is None:
            return default

        with old_tail.get().borrow_mut() as old:
            _check_detachable(old_tail)
            new_tail = old.value.prev
            if new_tail is None:
                head = self._head
                self._head = None
                if head is not None:
                    head.drop()
            else:
                with new_tail.get().borrow_mut() as new:
                    forward = new.value.next
                    new.value.next = None
                if forward is not None:
                    forward.drop()
            old.value.prev = None
        self._tail = new_tail
        self._size -= 1
        return old_tail.try_unwrap().into_inner().elem

    def peek_left(self) -> PeekGuard[T] | None:
        """Return a read guard on the head element, or None if empty."""
        if self._head is None:
            return None
        return PeekGuard(self._head)

    def peek_right(self) -> PeekGuard[T] | None:
        """Return a read guard on the tail element, or None if empty."""
        if self._tail is None:
            return None
        return PeekGuard(self._tail)

    def peek_left_mut(self) -> PeekMutGuard[T] | None:
        """Return a write guard on the head element, or None if empty."""
        if self._head is None:
            return None
        return PeekMutGuard(self._head)

    def peek_right_mut(self) -> PeekMutGuard[T] | None:
        """Return a write guard on the tail element, or None if empty."""
        if self._tail is None:
            return None
        return PeekMutGuard(self._tail)

    def into_iter(self) -> IntoIter[T]:
        """Move every element into a consuming iterator, leaving this list empty."""
        moved: DoublyLinkedList[T] = DoublyLinkedList()
        moved._head, moved._tail, moved._size = self._head, self._tail, self._size
        self._head = None
        self._tail = None
        self._size = 0
        return IntoIter(moved)

    def snapshot(self) -> list[T]:
        """Copy the elements head to tail, following ``next``."""
        out: list[T] = []
        link = self._head
        while link is not None:
            with link.get().borrow() as ref:
                out.append(ref.value.elem)
                link = ref.value.next
        return out

    def snapshot_reversed(self) -> list[T]:
        """Copy the elements tail to head, following ``prev``."""
        out: list[T] = []
        link = self._tail
        while link is not None:
            with link.get().borrow() as ref:
                out.append(ref.value.elem)
                link = ref.value.prev
        return out

    def close(self) -> None:
        """
        Release every node, one per loop iteration.

        Letting each node's finalizer release its successor would nest as
        deep as the list is long. Instead the chain is cut link by link.
        A node that is still borrowed or held elsewhere stops the loop; the
        rest of the chain then belongs to whoever holds that node.
        """
        link = self._head
        tail = self._tail
        self._head = None
        self._tail = None
        self._size = 0
        if tail is not None:
            tail.drop()

        released = 0
        while link is not None:
            ref = link.get().try_borrow_mut()
            if ref is None:
                log.debug("Teardown stopped at a borrowed node after %d nodes", released)
                link.drop()
                return
            with ref:
                node = ref.value
                nxt = node.next
                # Our handle, plus the successor's back-reference if any
                expected = 1 if nxt is None else 2
                if link.strong_count != expected:
                    log.debug("Teardown stopped at a shared node after %d nodes", released)
                    link.drop()
                    return
                if nxt is not None:
                    succ = nxt.get().try_borrow_mut()
                    if succ is None:
                        log.debug(
                            "Teardown stopped before a borrowed node after %d nodes", released
                        )
                        link.drop()
                        return
                    with succ:
                        back = succ.value.prev
                        succ.value.prev = None
                    if back is not None:
                        back.drop()
                node.next = None
            link.try_unwrap()
            released += 1
            link = nxt
        if released:
            log.debug("Teardown released %d nodes", released)

    def is_empty(self) -> bool:
        return self._head is None

    def __len__(self) -> int:
        """Return the number of nodes in the list."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the list is non-empty."""
        return self._head is not None

    def __enter__(self) -> "DoublyLinkedList[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()

    def __repr__(self) -> str:
        parts: list[str] = []
        link = self._head
        while link is not None:
            ref = link.get().try_borrow()
            if ref is None:
                # The chain cannot be followed past a mutably borrowed node
                parts.append("<borrowed>")
                if len(parts) < self._size:
                    parts.append("...")
                break
            with ref:
                parts.append(repr(ref.value.elem))
                link = ref.value.next
        return f"{type(self).__name__}([{', '.join(parts)}])"


def _check_detachable(link: Rc[RefCell[Node[T]]]) -> None:
    """Check that an end node is held only by its slot and its neighbour (or the other slot)."""
    if link.strong_count != 2:
        raise SharedReferenceError(
            f"Cannot detach node: {link.strong_count - 2} outside handles still alive"
        )
