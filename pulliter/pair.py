"""
Two-element value types produced by joining cursors.
"""

from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Pair(NamedTuple, Generic[T, U]):
    """
    An immutable 2-tuple of heterogeneous values.

    Used for element/index, key/value and value/error joins. Equality is
    structural and a pair unpacks like a plain tuple.
    """

    first: T
    second: U


# Pair of an element and its zero-based position
type Enumeration[T] = Pair[T, int]
