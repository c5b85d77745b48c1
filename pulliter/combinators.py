"""
Combinators that build new cursors out of existing ones.

Every function here is lazy: it only wires advancers together and never
pulls an element from its arguments. The returned cursor takes ownership
of the cursors it wraps; they should not be advanced directly afterwards
unless an operator documents otherwise (``Cursor.limit``).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .config import AllocationOption, AllocOptions
from .core import Cursor, empty, natural_order
from .pair import Enumeration, Pair

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K")


def chain(*cursors: Cursor[T]) -> Cursor[T]:
    """
    Yield all elements of each cursor in turn.

    Args:
        *cursors: Cursors to drain, in order

    Returns:
        A cursor that is exhausted once every argument is exhausted
    """
    return Cursor(ChainAdvancer(list(cursors)))


def zip_cursors(first: Cursor[T], second: Cursor[U]) -> Cursor[Pair[T, U]]:
    """
    Pair up elements of two cursors.

    The shorter cursor decides the length; nothing is padded. When ``first``
    runs out, ``second`` is not advanced again.

    Example:
        >>> from pulliter import from_sequence, zip_cursors
        >>> zip_cursors(from_sequence("ab"), from_sequence([1, 2, 3])).collect()
        [Pair(first='a', second=1), Pair(first='b', second=2)]
    """
    return Cursor(ZipAdvancer(first, second))


def map_cursor(cursor: Cursor[T], func: Callable[[T], U]) -> Cursor[U]:
    """Apply ``func`` to each element of ``cursor``."""
    return cursor.map(func)


def enumerate_cursor(cursor: Cursor[T]) -> Cursor[Enumeration[T]]:
    """Pair each element with its zero-based index, as ``Pair(element, index)``."""
    return Cursor(EnumerateAdvancer(cursor))


def batched(cursor: Cursor[T], size: int) -> Cursor[list[T]]:
    """
    Group elements into lists of ``size`` elements.

    The last list holds the remainder and may be shorter; there is never an
    empty trailing list. A non-positive size yields nothing.

    Example:
        >>> from pulliter import batched, from_sequence
        >>> batched(from_sequence(range(5)), 2).collect()
        [[0, 1], [2, 3], [4]]
    """
    if size <= 0:
        return empty()
    return Cursor(BatchedAdvancer(cursor, size))


def repeat(value: T) -> Cursor[T]:
    """Create an infinite cursor yielding ``value`` over and over."""
    return Cursor(RepeatAdvancer(value))


def cycle(cursor: Cursor[T], *opts: AllocationOption) -> Cursor[T]:
    """
    Yield the elements of ``cursor``, then replay them forever.

    Elements are buffered during the first pass. If ``cursor`` is empty the
    result is empty too.

    Args:
        cursor: Source cursor
        *opts: Allocation options for the replay buffer

    Returns:
        An infinite cursor, or an exhausted one for an empty source
    """
    return Cursor(CycleAdvancer(cursor, AllocOptions.resolve(opts)))


def uniq(cursor: Cursor[T], *opts: AllocationOption) -> Cursor[T]:
    """
    Yield each distinct element once, the first time it appears.

    Elements already yielded are remembered, so ``[1, 2, 1, 3, 2]`` becomes
    ``[1, 2, 3]``. Elements must be hashable.

    Args:
        cursor: Source cursor
        *opts: Allocation options for the set of seen elements
    """
    return Cursor(UniqAdvancer(cursor, None, AllocOptions.resolve(opts)))


def uniq_func(
    cursor: Cursor[T], key: Callable[[T], K], *opts: AllocationOption
) -> Cursor[T]:
    """
    Yield elements whose key has not been seen before.

    The first element with a given key is kept; later elements with the
    same key are skipped wherever they occur.

    Args:
        cursor: Source cursor
        key: Function deriving the hashable comparison key of an element
        *opts: Allocation options for the set of seen keys

    Example:
        >>> from pulliter import from_sequence, uniq_func
        >>> uniq_func(from_sequence(["Hello", "HELLO", "World"]), str.lower).collect()
        ['Hello', 'World']
    """
    return Cursor(UniqAdvancer(cursor, key, AllocOptions.resolve(opts)))


def sorted_cursor(cursor: Cursor[T], *opts: AllocationOption) -> Cursor[T]:
    """Yield the elements of ``cursor`` in ascending natural order."""
    return cursor.sorted(*opts)


def max_of(cursor: Cursor[T]) -> T | None:
    """Maximum by natural order; the first of equal maxima wins, None if empty."""
    return cursor.max(natural_order)


def min_of(cursor: Cursor[T]) -> T | None:
    """Minimum by natural order; the first of equal minima wins, None if empty."""
    return cursor.max(lambda a, b: -natural_order(a, b))


def sum_of(cursor: Cursor[Any], start: Any = 0) -> Any:
    """Add up the elements of ``cursor``."""
    return cursor.sum(start)


def find(cursor: Cursor[T], predicate: Callable[[T], bool]) -> tuple[T | None, bool]:
    """Return (element, True) for the first match, or (None, False)."""
    return cursor.find(predicate)


# Concrete advancers


class ChainAdvancer[T]:
    """Advancer draining several cursors one after another."""

    def __init__(self, cursors: list[Cursor[T]]):
        self.cursors = cursors
        self.index = 0

    def advance(self) -> tuple[T | None, bool]:
        while self.index < len(self.cursors):
            cursor = self.cursors[self.index]
            if cursor.advance():
                return cursor.current(), True
            self.index += 1
        return None, False


class ZipAdvancer[T, U]:
    """Advancer stepping two cursors in lockstep."""

    def __init__(self, first: Cursor[T], second: Cursor[U]):
        self.first = first
        self.second = second

    def advance(self) -> tuple[Pair[T, U] | None, bool]:
        if not self.first.advance() or not self.second.advance():
            return None, False
        return Pair(self.first.current(), self.second.current()), True


class EnumerateAdvancer[T]:
    """Advancer pairing elements with a running index."""

    def __init__(self, base: Cursor[T]):
        self.base = base
        self.index = 0

    def advance(self) -> tuple[Enumeration[T] | None, bool]:
        if not self.base.advance():
            return None, False
        result = Pair(self.base.current(), self.index)
        self.index += 1
        return result, True


class BatchedAdvancer[T]:
    """Advancer grouping upstream elements into fixed-size lists."""

    def __init__(self, base: Cursor[T], size: int):
        self.base = base
        self.size = size

    def advance(self) -> tuple[list[T] | None, bool]:
        batch = []
        while len(batch) < self.size and self.base.advance():
            batch.append(self.base.current())
        if not batch:
            return None, False
        return batch, True


class RepeatAdvancer[T]:
    """Advancer that never runs out."""

    def __init__(self, value: T):
        self.value = value

    def advance(self) -> tuple[T, bool]:
        return self.value, True


class CycleAdvancer[T]:
    """
    Advancer replaying its upstream forever.

    While the upstream has elements they are passed through and recorded;
    afterwards the recording is replayed from the start, wrapping around.
    """

    def __init__(self, base: Cursor[T], options: AllocOptions):
        self.base = base
        self.buffer: list[Any] = [None] * options.prealloc_size
        self.size = 0
        self.replaying = False
        self.index = 0

    def advance(self) -> tuple[T | None, bool]:
        if not self.replaying:
            if self.base.advance():
                value = self.base.current()
                if self.size < len(self.buffer):
                    self.buffer[self.size] = value
                else:
                    self.buffer.append(value)
                self.size += 1
                return value, True
            del self.buffer[self.size :]
            self.replaying = True

        if not self.buffer:
            return None, False
        value = self.buffer[self.index]
        self.index = (self.index + 1) % len(self.buffer)
        return value, True


class UniqAdvancer[T, K]:
    """
    Advancer skipping elements whose key was produced before.

    Seen keys are kept in a set that grows on demand; the allocation hint
    is recorded but Python sets cannot reserve capacity up front.
    """

    def __init__(
        self,
        base: Cursor[T],
        key: Callable[[T], K] | None,
        options: AllocOptions,
    ):
        self.base = base
        self.key = key
        self.options = options
        self.seen: set[Any] = set()

    def advance(self) -> tuple[T | None, bool]:
        while self.base.advance():
            value = self.base.current()
            key = value if self.key is None else self.key(value)
            if key in self.seen:
                continue
            self.seen.add(key)
            return value, True
        return None, False
