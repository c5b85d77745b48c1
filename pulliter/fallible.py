"""
Cursors over fallible production functions.

A fallible cursor yields ``Pair(value, error)`` elements. The production
function reports the end of the sequence by returning an ``IterationStop``
error (normally the ``ITERATION_STOP`` sentinel); any other error is handed
to the consumer together with the element and does not stop iteration.
Errors are always returned, never raised.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .core import Cursor
from .pair import Pair

T = TypeVar("T")
U = TypeVar("U")

type Production[T] = Callable[[], tuple[T | None, Exception | None]]


class IterationStop(Exception):
    """Signals the benign end of a fallible sequence; not a real failure."""


# Sentinel returned by production functions that have nothing left
ITERATION_STOP = IterationStop("iteration stop")


class FallibleAdvancer[T]:
    """Advancer translating the stop error into ordinary exhaustion."""

    def __init__(self, produce: Production[T]):
        self.produce = produce

    def advance(self) -> tuple[Pair[T | None, Exception | None] | None, bool]:
        value, error = self.produce()
        if isinstance(error, IterationStop):
            return None, False
        return Pair(value, error), True


class FallibleCursor[T](Cursor[Pair[T | None, Exception | None]]):
    """
    Cursor yielding (value, error) pairs from a fallible production function.

    All Cursor operations apply to the pairs. The consumer decides what to
    do with an element carrying an error; ``collect_until_error`` stops at
    the first one.
    """

    def __init__(self, produce: Production[T]):
        super().__init__(FallibleAdvancer(produce))

    def result(self) -> tuple[T | None, Exception | None]:
        """
        Unpack the current element.

        Returns:
            A tuple of (value, error); (None, None) before the first advance
        """
        current = self.current()
        if current is None:
            return None, None
        return current.first, current.second

    def collect_until_error(self) -> tuple[list[T] | None, Exception | None]:
        """
        Collect values until exhaustion or the first element with an error.

        Returns:
            (values, None) if no element carried an error, otherwise
            (None, first_error). Elements after the first error are not read.
        """
        results: list[T] = []
        while self.advance():
            value, error = self.result()
            if error is not None:
                return None, error
            results.append(value)
        return results, None


def new(produce: Production[T]) -> FallibleCursor[T]:
    """
    Create a fallible cursor from a production function.

    Args:
        produce: Zero-argument function returning (value, error); returning
            an ``IterationStop`` error ends the sequence

    Example:
        >>> from pulliter import fallible
        >>> source = iter(["1", "2", "x"])
        >>> def parse():
        ...     text = next(source, None)
        ...     if text is None:
        ...         return None, fallible.ITERATION_STOP
        ...     try:
        ...         return int(text), None
        ...     except ValueError as exc:
        ...         return None, exc
        >>> values, error = fallible.new(parse).collect_until_error()
        >>> values, type(error).__name__
        (None, 'ValueError')
    """
    return FallibleCursor(produce)


def catching(func: Callable[[], T]) -> Production[T]:
    """
    Turn a zero-argument function that raises into a production function.

    An ``IterationStop`` raised by ``func`` ends the sequence; any other
    ``Exception`` becomes the error of the produced element.
    """

    def produce() -> tuple[T | None, Exception | None]:
        try:
            return func(), None
        except IterationStop as stop:
            return None, stop
        except Exception as exc:
            return None, exc

    return produce


def map_fallible(cursor: Cursor[T], mapper: Callable[[T], U]) -> FallibleCursor[U]:
    """
    Apply a mapper that may raise to each element of ``cursor``.

    An exception raised by the mapper is paired with a None value and
    iteration carries on with the next element. The result ends when
    ``cursor`` does.

    Example:
        >>> from pulliter import fallible, from_sequence
        >>> pairs = fallible.map_fallible(from_sequence(["1", "x"]), int).collect()
        >>> pairs[0], type(pairs[1].second).__name__
        (Pair(first=1, second=None), 'ValueError')
    """

    def produce() -> tuple[U | None, Exception | None]:
        if not cursor.advance():
            return None, ITERATION_STOP
        return catching(lambda: mapper(cursor.current()))()

    return FallibleCursor(produce)
