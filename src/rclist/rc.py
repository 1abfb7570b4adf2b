"""Reference-counted shared handles."""

from dataclasses import dataclass
from typing import Any, Generic

from rclist.errors import ReleasedReferenceError, SharedReferenceError
from rclist.types import T


@dataclass
class RcBox(Generic[T]):
    """Internal allocation shared by every handle of one Rc."""

    value: T | None
    strong: int = 1

    def release(self) -> None:
        """Forget the stored value once the last handle is gone."""
        self.strong = 0
        self.value = None


class Rc(Generic[T]):
    """
    Shared handle with an explicit strong count.

    Python keeps objects alive on its own, so the count here is bookkeeping:
    it tells the list whether anyone besides the chain still holds a node.
    Each handle must be dropped exactly once; dropping twice is a no-op and
    using a dropped handle raises ReleasedReferenceError.
    """

    __slots__ = ("_box",)

    def __init__(self, value: T) -> None:
        self._box: RcBox[T] | None = RcBox(value)

    @classmethod
    def _from_box(cls, box: RcBox[T]) -> "Rc[T]":
        rc = cls.__new__(cls)
        rc._box = box
        return rc

    def _live_box(self) -> RcBox[T]:
        if self._box is None:
            raise ReleasedReferenceError("Rc handle used after it was dropped")
        return self._box

    def clone(self) -> "Rc[T]":
        """Return a new handle to the same value, bumping the strong count."""
        box = self._live_box()
        box.strong += 1
        return Rc._from_box(box)

    def drop(self) -> None:
        """Release this handle. The value is forgotten when the count hits zero."""
        box = self._box
        if box is None:
            return
        self._box = None
        box.strong -= 1
        if box.strong == 0:
            box.release()

    def get(self) -> T:
        """Return the shared value."""
        box = self._live_box()
        return box.value  # type: ignore[return-value]

    @property
    def strong_count(self) -> int:
        """Number of live handles to the shared value (0 once this one is dropped)."""
        if self._box is None:
            return 0
        return self._box.strong

    @property
    def released(self) -> bool:
        """True once this handle was dropped or unwrapped."""
        return self._box is None

    def try_unwrap(self) -> T:
        """
        Take the value out, consuming this handle.

        Raises:
            SharedReferenceError: If any other handle to the value is alive
            ReleasedReferenceError: If this handle was already released
        """
        box = self._live_box()
        if box.strong != 1:
            raise SharedReferenceError(
                f"Cannot unwrap shared reference: {box.strong} handles alive"
            )
        value = box.value
        box.release()
        self._box = None
        return value  # type: ignore[return-value]

    def ptr_eq(self, other: "Rc[Any]") -> bool:
        """Return True if both handles point at the same allocation."""
        return self._box is not None and self._box is other._box

    def __repr__(self) -> str:
        if self._box is None:
            return "Rc(<released>)"
        return f"Rc({self._box.value!r}, strong={self._box.strong})"
