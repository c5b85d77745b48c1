"""
Core cursor implementation.

This module contains the Cursor class, the single pull-based iteration
abstraction of the library, together with the advancers behind its
built-in transformation methods. Every cursor owns one advancer; derived
cursors own the cursor they wrap, forming a linear chain from the source
adapter to the terminal operation that drives it.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .config import AllocationOption, AllocOptions
from .consumers import (
    AllConsumer,
    AnyConsumer,
    CollectConsumer,
    CountConsumer,
    FindConsumer,
    ForEachConsumer,
    MaxConsumer,
    RangeConsumer,
    ReduceConsumer,
    SumConsumer,
)
from .protocols import Advancer, Comparator

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


def natural_order(a: Any, b: Any) -> int:
    """3-way comparison using the ``<`` and ``>`` operators of the elements."""
    return (a > b) - (a < b)


class Cursor[T]:
    """
    A stateful, single-pass, pull-based iterator.

    A cursor is either Ready or Exhausted. ``advance`` moves it to the next
    element and reports whether one exists; once it reports False the cursor
    is Exhausted for good and its advancer is never called again. Cursors
    also implement the Python iterator protocol, sharing the same state.

    A cursor has exactly one logical reader; it is not safe to advance the
    same instance from several threads.
    """

    def __init__(self, advancer: Advancer[T] | Callable[[], tuple[T | None, bool]]):
        """
        Create a cursor driven by an advancer.

        Args:
            advancer: An object with an ``advance()`` method, or a zero-argument
                function, returning a tuple of (element, has_more)

        Raises:
            TypeError: If ``advancer`` is itself a Cursor
        """
        if isinstance(advancer, Cursor):
            raise TypeError(
                "Cursor() needs an advancer, not a Cursor; "
                "use into_cursor() to pass a cursor through"
            )
        if not hasattr(advancer, "advance"):
            advancer = FunctionAdvancer(advancer)
        self._advancer = advancer
        self._value: T | None = None
        self._may_proceed = True

    # Protocol

    def advance(self) -> bool:
        """
        Move to the next element.

        Returns:
            True if a new element is available through ``current()``,
            False if the cursor is exhausted (permanently)
        """
        if not self._may_proceed:
            return False
        self._value, self._may_proceed = self._advancer.advance()
        return self._may_proceed

    def current(self) -> T | None:
        """
        Return the element produced by the last successful ``advance``.

        The value is unspecified (``None`` or a stale element) before the
        first successful advance and after exhaustion; it never raises.
        """
        return self._value

    @property
    def exhausted(self) -> bool:
        """True once ``advance`` has reported the end of the sequence."""
        return not self._may_proceed

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self.advance():
            raise StopIteration
        return self._value

    # Composition operators

    def filter(self, predicate: Callable[[T], bool]) -> Cursor[T]:
        """
        Keep only elements for which the predicate returns True.

        Args:
            predicate: Function that returns True for elements to keep

        Returns:
            A new cursor of the kept elements
        """
        return Cursor(FilterAdvancer(self, predicate))

    def map(self, func: Callable[[T], U]) -> Cursor[U]:
        """
        Apply a function to each element.

        Args:
            func: Function to apply to each element

        Returns:
            A new cursor of transformed elements
        """
        return Cursor(MapAdvancer(self, func))

    def limit(self, size: int) -> Cursor[T]:
        """
        Yield at most ``size`` elements.

        This cursor is never advanced past the ``size``-th element, so it can
        be resumed afterwards. A non-positive size yields nothing.

        Args:
            size: Maximum number of elements

        Returns:
            A new cursor over the first ``size`` elements
        """
        if size <= 0:
            return empty()
        return Cursor(LimitAdvancer(self, size))

    def with_step(self, step: int) -> Cursor[T]:
        """
        Yield every ``step``-th element, starting with the first one.

        A non-positive step yields nothing.

        Args:
            step: Distance between yielded elements

        Returns:
            A new cursor over elements at positions 0, step, 2*step, ...
        """
        if step <= 0:
            return empty()
        return Cursor(StepAdvancer(self, step))

    def drop(self, n: int) -> int:
        """
        Skip the next ``n`` elements of this cursor.

        Args:
            n: Number of elements to skip

        Returns:
            The number of elements actually skipped, smaller than ``n`` when
            the cursor runs out first
        """
        dropped = 0
        while dropped < n and self.advance():
            dropped += 1
        return dropped

    def sorted_by(self, cmp: Comparator[T], *opts: AllocationOption) -> Cursor[T]:
        """
        Yield the elements of this cursor in the order defined by ``cmp``.

        The whole cursor is drained and sorted on the first advance of the
        returned cursor. The sort is stable.

        Args:
            cmp: 3-way comparator (negative, zero, positive)
            *opts: Allocation options for the sort buffer

        Returns:
            A new cursor over the sorted elements
        """
        return Cursor(SortedAdvancer(self, cmp, opts))

    def sorted(self, *opts: AllocationOption) -> Cursor[T]:
        """Yield the elements of this cursor in ascending natural order."""
        return self.sorted_by(natural_order, *opts)

    def batched(self, size: int) -> Cursor[list[T]]:
        """Group elements into lists of ``size``. See ``combinators.batched``."""
        from .combinators import batched

        return batched(self, size)

    def cycle(self, *opts: AllocationOption) -> Cursor[T]:
        """Repeat the elements of this cursor forever. See ``combinators.cycle``."""
        from .combinators import cycle

        return cycle(self, *opts)

    def uniq(self, *opts: AllocationOption) -> Cursor[T]:
        """Yield each distinct element once. See ``combinators.uniq``."""
        from .combinators import uniq

        return uniq(self, *opts)

    def uniq_by(self, key: Callable[[T], Any], *opts: AllocationOption) -> Cursor[T]:
        """Yield elements with a not yet seen key. See ``combinators.uniq_func``."""
        from .combinators import uniq_func

        return uniq_func(self, key, *opts)

    def enumerate(self):
        """Pair each element with its zero-based index."""
        from .combinators import enumerate_cursor

        return enumerate_cursor(self)

    def zip(self, other: Cursor[U]):
        """Pair elements of this cursor with elements of ``other``."""
        from .combinators import zip_cursors

        return zip_cursors(self, other)

    def chain(self, *others: Cursor[T]) -> Cursor[T]:
        """Yield this cursor's elements, then those of each of ``others``."""
        from .combinators import chain

        return chain(self, *others)

    # Terminal operations

    def count(self) -> int:
        """
        Count the remaining elements.

        Returns:
            The number of elements yielded before exhaustion
        """
        return CountConsumer().consume(self)

    def collect(self, *opts: AllocationOption) -> list[T]:
        """
        Collect all remaining elements into a list, in yield order.

        Args:
            *opts: Allocation options (``with_prealloc``)

        Returns:
            A list containing all elements
        """
        return CollectConsumer(AllocOptions.resolve(opts)).consume(self)

    def reduce(self, initial: R, func: Callable[[R, T], R]) -> R:
        """
        Fold the elements from left to right.

        Args:
            initial: Initial accumulator value
            func: Function combining the accumulator and an element

        Returns:
            The final accumulator value
        """
        return ReduceConsumer(initial, func).consume(self)

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """
        Check if all elements match the predicate.

        Stops at the first element that does not match. True for an empty
        cursor.
        """
        return AllConsumer(predicate).consume(self)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """
        Check if any element matches the predicate.

        Stops at the first element that matches. False for an empty cursor.
        """
        return AnyConsumer(predicate).consume(self)

    def find(self, predicate: Callable[[T], bool]) -> tuple[T | None, bool]:
        """
        Find the first element matching the predicate.

        Returns:
            A tuple of (element, True), or (None, False) if no element matches
        """
        return FindConsumer(predicate).consume(self)

    def range(self, visitor: Callable[[T], bool]) -> None:
        """
        Call ``visitor`` for each element until it returns a false value.

        Args:
            visitor: Function returning True to continue, False to stop
        """
        RangeConsumer(visitor).consume(self)

    def for_each(self, func: Callable[[T], Any]) -> None:
        """Call ``func`` for every remaining element."""
        ForEachConsumer(func).consume(self)

    def max(self, cmp: Comparator[T] = natural_order) -> T | None:
        """
        Find the maximum element.

        Ties keep the element encountered first.

        Args:
            cmp: 3-way comparator (defaults to natural ordering)

        Returns:
            The maximum element, or None if the cursor is empty
        """
        return MaxConsumer(cmp).consume(self)

    def sum(self, start: Any = 0) -> Any:
        """Add up all elements, starting from ``start``."""
        return SumConsumer(start).consume(self)


def new(func: Callable[[], tuple[T | None, bool]]) -> Cursor[T]:
    """
    Create a cursor from an iteration function.

    The function returns a tuple of (element, has_more); has_more False
    means that the iteration is over.

    Example:
        >>> from pulliter import new
        >>> state = {"n": 0}
        >>> def count_to_three():
        ...     state["n"] += 1
        ...     return state["n"], state["n"] <= 3
        >>> new(count_to_three).collect()
        [1, 2, 3]
    """
    return Cursor(FunctionAdvancer(func))


def empty() -> Cursor[Any]:
    """Create a cursor that is exhausted on the first advance."""
    return Cursor(EmptyAdvancer())


# Concrete advancers


class FunctionAdvancer[T]:
    """Advancer delegating to a plain (element, has_more) function."""

    def __init__(self, func: Callable[[], tuple[T | None, bool]]):
        self.func = func

    def advance(self) -> tuple[T | None, bool]:
        return self.func()


class EmptyAdvancer:
    """Advancer with no elements."""

    def advance(self) -> tuple[None, bool]:
        return None, False


class FilterAdvancer[T]:
    """Advancer that skips upstream elements failing a predicate."""

    def __init__(self, base: Cursor[T], predicate: Callable[[T], bool]):
        self.base = base
        self.predicate = predicate

    def advance(self) -> tuple[T | None, bool]:
        while self.base.advance():
            value = self.base.current()
            if self.predicate(value):
                return value, True
        return None, False


class MapAdvancer[T, U]:
    """Advancer that transforms each upstream element."""

    def __init__(self, base: Cursor[T], func: Callable[[T], U]):
        self.base = base
        self.func = func

    def advance(self) -> tuple[U | None, bool]:
        if not self.base.advance():
            return None, False
        return self.func(self.base.current()), True


class LimitAdvancer[T]:
    """Advancer that stops after a fixed number of upstream elements."""

    def __init__(self, base: Cursor[T], size: int):
        self.base = base
        self.size = size
        self.count = 0

    def advance(self) -> tuple[T | None, bool]:
        # Check the count first so the upstream is not advanced past the limit
        if self.count >= self.size or not self.base.advance():
            return None, False
        self.count += 1
        return self.base.current(), True


class StepAdvancer[T]:
    """Advancer yielding upstream elements whose index is a multiple of step."""

    def __init__(self, base: Cursor[T], step: int):
        self.base = base
        self.step = step
        self.index = -1

    def advance(self) -> tuple[T | None, bool]:
        while self.base.advance():
            self.index += 1
            if self.index % self.step == 0:
                return self.base.current(), True
        return None, False


class SortedAdvancer[T]:
    """Advancer that drains its upstream, sorts it, then replays the result."""

    def __init__(
        self,
        base: Cursor[T],
        cmp: Comparator[T],
        opts: tuple[AllocationOption, ...],
    ):
        self.base = base
        self.cmp = cmp
        self.opts = opts
        self.values: list[T] | None = None
        self.index = 0

    def advance(self) -> tuple[T | None, bool]:
        if self.values is None:
            self.values = self.base.collect(*self.opts)
            self.values.sort(key=functools.cmp_to_key(self.cmp))
        if self.index >= len(self.values):
            return None, False
        value = self.values[self.index]
        self.index += 1
        return value, True
