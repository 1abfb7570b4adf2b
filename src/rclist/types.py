"""Type definitions for rclist."""

from typing import Literal, TypeAlias, TypeVar

# Generic type variables for stored elements and pop defaults
T = TypeVar("T")  # Element type
D = TypeVar("D")  # Default returned by pops on an empty list

# Runtime state of a RefCell access gate
BorrowState: TypeAlias = Literal["unused", "shared", "exclusive"]
