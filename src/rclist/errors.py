"""Exception classes for rclist.

Every exception here signals a broken usage contract, not a transient
condition. Empty lists and exhausted iterators are reported with ``None``
and ``StopIteration`` instead.
"""


class RcListError(Exception):
    """Base exception for all rclist errors."""


class BorrowError(RcListError):
    """Raised when a shared borrow is requested while the value is exclusively borrowed."""


class BorrowMutError(RcListError):
    """Raised when an exclusive borrow is requested while any borrow is outstanding."""


class SharedReferenceError(RcListError):
    """Raised when unwrapping a shared reference that still has other holders."""


class ReleasedReferenceError(RcListError):
    """Raised when a reference or borrow guard is used after it was released."""
