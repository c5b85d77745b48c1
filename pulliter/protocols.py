"""
Core protocol definitions for pull-based cursors.

These protocols define the interface that element sources and terminal
consumers must implement. A cursor is driven by exactly one advancer and
is drained by consumers.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from .core import Cursor

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)  # Covariant for Advancer (output only)
T_contra = TypeVar(
    "T_contra", contravariant=True
)  # Contravariant for Consumer (input only)
R = TypeVar("R")
R_co = TypeVar("R_co", covariant=True)


class Advancer(Protocol[T_co]):
    """
    A source of elements that is pulled one step at a time.

    Advancers hold all of their iteration state themselves. They are owned
    by exactly one cursor, which guarantees that ``advance`` is never called
    again once it has reported that the source is exhausted.
    """

    @abstractmethod
    def advance(self) -> tuple[T_co | None, bool]:
        """
        Produce the next element.

        Returns:
            A tuple of (element, has_more). When has_more is False the
            element is meaningless and the source is exhausted.
        """
        ...


class Consumer(Protocol[T_contra, R_co]):
    """
    A consumer drains a cursor, fully or partially, and produces a result.
    """

    @abstractmethod
    def consume(self, cursor: Cursor[T_contra]) -> R_co:
        """
        Pull elements from the cursor and produce a result.

        Args:
            cursor: The cursor to drain

        Returns:
            The result of consuming the elements
        """
        ...


class Comparator(Protocol[T_contra]):
    """3-way comparison: negative, zero or positive for a < b, a == b, a > b."""

    def __call__(self, a: T_contra, b: T_contra, /) -> int: ...
