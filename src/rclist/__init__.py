"""rclist - Doubly-linked list with reference-counted, borrow-checked links."""

from rclist.cell import Ref, RefCell, RefMut
from rclist.errors import (
    BorrowError,
    BorrowMutError,
    RcListError,
    ReleasedReferenceError,
    SharedReferenceError,
)
from rclist.guards import PeekGuard, PeekMutGuard
from rclist.iterator import IntoIter
from rclist.linkedlist import DoublyLinkedList, Node
from rclist.rc import Rc
from rclist.types import BorrowState

__version__ = "0.0.1"

__all__ = [
    "DoublyLinkedList",
    "Node",
    "IntoIter",
    "PeekGuard",
    "PeekMutGuard",
    "Rc",
    "RefCell",
    "Ref",
    "RefMut",
    "RcListError",
    "BorrowError",
    "BorrowMutError",
    "SharedReferenceError",
    "ReleasedReferenceError",
    "BorrowState",
]
