"""
Consumer implementations for terminal cursor operations.

Consumers drive a cursor by calling ``advance`` until it is exhausted or
until the operation can short-circuit, and turn the elements into a result.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from .config import AllocOptions

if TYPE_CHECKING:
    from .core import Cursor
    from .protocols import Comparator

T = TypeVar("T")
R = TypeVar("R")


class CountConsumer:
    """Consumer that counts elements."""

    def consume(self, cursor: Cursor[Any]) -> int:
        count = 0
        while cursor.advance():
            count += 1
        return count


class CollectConsumer[T]:
    """Consumer that collects elements into a list, preserving order."""

    def __init__(self, options: AllocOptions):
        self.options = options

    def consume(self, cursor: Cursor[T]) -> list[T]:
        """Fill a preallocated buffer, growing it past the hint if needed."""
        buffer: list[Any] = [None] * self.options.prealloc_size
        size = 0
        while cursor.advance():
            if size < len(buffer):
                buffer[size] = cursor.current()
            else:
                buffer.append(cursor.current())
            size += 1
        del buffer[size:]
        return buffer


class ReduceConsumer[T, R]:
    """Consumer that folds elements from left to right."""

    def __init__(self, initial: R, func: Callable[[R, T], R]):
        self.initial = initial
        self.func = func

    def consume(self, cursor: Cursor[T]) -> R:
        acc = self.initial
        while cursor.advance():
            acc = self.func(acc, cursor.current())
        return acc


class SumConsumer:
    """Consumer that adds up elements."""

    def __init__(self, start: Any = 0):
        self.start = start

    def consume(self, cursor: Cursor[Any]) -> Any:
        total = self.start
        while cursor.advance():
            total += cursor.current()
        return total


class AllConsumer[T]:
    """Consumer that stops at the first element failing the predicate."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def consume(self, cursor: Cursor[T]) -> bool:
        while cursor.advance():
            if not self.predicate(cursor.current()):
                return False
        return True


class AnyConsumer[T]:
    """Consumer that stops at the first element passing the predicate."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def consume(self, cursor: Cursor[T]) -> bool:
        while cursor.advance():
            if self.predicate(cursor.current()):
                return True
        return False


class FindConsumer[T]:
    """Consumer returning the first element passing the predicate."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def consume(self, cursor: Cursor[T]) -> tuple[T | None, bool]:
        while cursor.advance():
            value = cursor.current()
            if self.predicate(value):
                return value, True
        return None, False


class RangeConsumer[T]:
    """Consumer that visits elements until the visitor asks to stop."""

    def __init__(self, visitor: Callable[[T], bool]):
        self.visitor = visitor

    def consume(self, cursor: Cursor[T]) -> None:
        while cursor.advance():
            if not self.visitor(cursor.current()):
                return


class ForEachConsumer[T]:
    """Consumer that executes a function for each element."""

    def __init__(self, func: Callable[[T], Any]):
        self.func = func

    def consume(self, cursor: Cursor[T]) -> None:
        while cursor.advance():
            self.func(cursor.current())


class MaxConsumer[T]:
    """
    Consumer that finds the maximum element with a 3-way comparator.

    Only a strictly greater element replaces the running maximum, so the
    first of several equal maxima wins. An empty cursor yields None.
    """

    def __init__(self, cmp: Comparator[T]):
        self.cmp = cmp

    def consume(self, cursor: Cursor[T]) -> T | None:
        if not cursor.advance():
            return None
        max_value = cursor.current()
        while cursor.advance():
            value = cursor.current()
            if self.cmp(max_value, value) < 0:
                max_value = value
        return max_value
