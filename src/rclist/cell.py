"""Runtime-checked interior mutability: one writer or many readers."""

from types import TracebackType
from typing import Generic

from rclist.errors import BorrowError, BorrowMutError, ReleasedReferenceError
from rclist.types import BorrowState, T

# Borrow counter value while an exclusive borrow is live
_EXCLUSIVE = -1


class RefCell(Generic[T]):
    """
    Mutable container guarded by a borrow counter.

    Conflicting borrows are programming errors, so they raise immediately
    instead of waiting: there is no blocking and no retry.
    """

    __slots__ = ("_value", "_borrow")

    def __init__(self, value: T) -> None:
        self._value = value
        self._borrow = 0

    @property
    def borrow_state(self) -> BorrowState:
        """Current state of the access gate."""
        if self._borrow == _EXCLUSIVE:
            return "exclusive"
        if self._borrow > 0:
            return "shared"
        return "unused"

    def borrow(self) -> "Ref[T]":
        """
        Take a shared borrow.

        Raises:
            BorrowError: If an exclusive borrow is live
        """
        return Ref(self)

    def borrow_mut(self) -> "RefMut[T]":
        """
        Take an exclusive borrow.

        Raises:
            BorrowMutError: If any borrow is live
        """
        return RefMut(self)

    def try_borrow(self) -> "Ref[T] | None":
        """Like borrow(), but return None on conflict."""
        try:
            return Ref(self)
        except BorrowError:
            return None

    def try_borrow_mut(self) -> "RefMut[T] | None":
        """Like borrow_mut(), but return None on conflict."""
        try:
            return RefMut(self)
        except BorrowMutError:
            return None

    def into_inner(self) -> T:
        """Return the wrapped value. The cell must not be borrowed."""
        if self._borrow != 0:
            raise BorrowMutError(f"Cannot take value out while {self.borrow_state}")
        return self._value

    def __repr__(self) -> str:
        if self._borrow == _EXCLUSIVE:
            return "RefCell(<borrowed>)"
        return f"RefCell({self._value!r})"


class Ref(Generic[T]):
    """Shared borrow of a RefCell, released on exit or when collected."""

    __slots__ = ("_cell",)

    def __init__(self, cell: RefCell[T]) -> None:
        self._cell: RefCell[T] | None = None
        if cell._borrow == _EXCLUSIVE:
            raise BorrowError("Already mutably borrowed")
        cell._borrow += 1
        self._cell = cell

    def _live_cell(self) -> RefCell[T]:
        if self._cell is None:
            raise ReleasedReferenceError("Borrow used after release")
        return self._cell

    @property
    def value(self) -> T:
        return self._live_cell()._value

    @property
    def released(self) -> bool:
        return self._cell is None

    def release(self) -> None:
        """End the borrow. Safe to call more than once."""
        cell = self._cell
        if cell is None:
            return
        self._cell = None
        cell._borrow -= 1

    def __enter__(self) -> "Ref[T]":
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


class RefMut(Generic[T]):
    """Exclusive borrow of a RefCell, released on exit or when collected."""

    __slots__ = ("_cell",)

    def __init__(self, cell: RefCell[T]) -> None:
        self._cell: RefCell[T] | None = None
        if cell._borrow != 0:
            raise BorrowMutError(f"Already borrowed ({cell.borrow_state})")
        cell._borrow = _EXCLUSIVE
        self._cell = cell

    def _live_cell(self) -> RefCell[T]:
        if self._cell is None:
            raise ReleasedReferenceError("Borrow used after release")
        return self._cell

    @property
    def value(self) -> T:
        return self._live_cell()._value

    @value.setter
    def value(self, value: T) -> None:
        self._live_cell()._value = value

    @property
    def released(self) -> bool:
        return self._cell is None

    def release(self) -> None:
        """End the borrow. Safe to call more than once."""
        cell = self._cell
        if cell is None:
            return
        self._cell = None
        cell._borrow = 0

    def __enter__(self) -> "RefMut[T]":
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
