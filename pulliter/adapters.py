"""
Adapters for converting standard Python objects into cursors.

This module provides the ergonomic interface for creating cursors from
sequences, queues, mappings, text and arbitrary iterables.
"""

from __future__ import annotations

import queue
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar, overload

from .core import Cursor
from .pair import Pair
from .producers import (
    CLOSED,
    BytesProducer,
    IterableProducer,
    MappingProducer,
    QueueProducer,
    SequenceProducer,
    Utf8Producer,
)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def from_sequence(data: Sequence[T], start: int = 0, end: int | None = None) -> Cursor[T]:
    """
    Create a cursor over a list, tuple or other sequence.

    Args:
        data: The sequence to iterate over
        start: Starting index (inclusive)
        end: Ending index (exclusive), or None for end of sequence

    Returns:
        A cursor yielding ``data[start:end]`` in order

    Raises:
        ValueError: If the bounds do not fit the sequence

    Example:
        >>> from pulliter import from_sequence
        >>> from_sequence([1, 2, 3, 4]).filter(lambda x: x % 2 == 0).collect()
        [2, 4]
    """
    return Cursor(SequenceProducer(data, start, end))


def from_queue(source: queue.Queue[T]) -> Cursor[T]:
    """
    Create a cursor receiving elements from a queue.

    Advancing blocks the calling thread until the next element arrives. The
    stream ends once the producing side calls ``close_queue`` (or shuts the
    queue down); there is no timeout.

    Example:
        >>> import queue
        >>> from pulliter import close_queue, from_queue
        >>> q = queue.Queue()
        >>> for n in (1, 2, 3):
        ...     q.put(n)
        >>> close_queue(q)
        >>> from_queue(q).sum()
        6
    """
    return Cursor(QueueProducer(source))


def close_queue(target: queue.Queue[Any]) -> None:
    """Signal readers of ``target`` that no more elements will be put."""
    target.put(CLOSED)


def from_mapping(data: Mapping[K, V] | None) -> Cursor[Pair[K, V]]:
    """
    Create a cursor over the entries of a mapping, as ``Pair(key, value)``.

    The order of entries is not guaranteed. The mapping must not be mutated
    while the cursor is in use. None is treated as an empty mapping.
    """
    return Cursor(MappingProducer(data, MappingProducer.ENTRIES))


def from_mapping_keys(data: Mapping[K, V] | None) -> Cursor[K]:
    """Create a cursor over the keys of a mapping. See ``from_mapping``."""
    return Cursor(MappingProducer(data, MappingProducer.KEYS))


def from_mapping_values(data: Mapping[K, V] | None) -> Cursor[V]:
    """Create a cursor over the values of a mapping. See ``from_mapping``."""
    return Cursor(MappingProducer(data, MappingProducer.VALUES))


def from_ascii(text: str | bytes | bytearray) -> Cursor[int]:
    """
    Create a cursor over the bytes of ``text``.

    A ``str`` is encoded as UTF-8 first, so non-ASCII characters yield
    several byte values each.
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    return Cursor(BytesProducer(text))


def from_utf8(text: str | bytes | bytearray) -> Cursor[str]:
    """
    Create a cursor over the codepoints of UTF-8 encoded text.

    Decoding stops silently at the first invalid sequence. A ``str`` is
    encoded first; lone surrogates in it count as invalid input.

    Example:
        >>> from pulliter import from_utf8
        >>> from_utf8(b"h\\xc3\\xa9\\xffllo").collect()
        ['h', 'é']
    """
    if isinstance(text, str):
        text = text.encode("utf-8", errors="surrogatepass")
    return Cursor(Utf8Producer(text))


def from_iterable(data: Iterable[T]) -> Cursor[T]:
    """Create a cursor pulling from any Python iterable or iterator."""
    return Cursor(IterableProducer(data))


@overload
def into_cursor(data: Mapping[K, V]) -> Cursor[Pair[K, V]]: ...


@overload
def into_cursor(data: Iterable[T] | queue.Queue[T]) -> Cursor[T]: ...


def into_cursor(data: Any) -> Cursor[Any]:
    """
    Convert a container or stream into a cursor.

    Cursors are returned unchanged; mappings yield their entries; queues are
    read until closed; sequences are read by position; anything else
    iterable is read through its iterator.

    Args:
        data: A cursor, mapping, queue, sequence or iterable

    Returns:
        A cursor over the data

    Raises:
        TypeError: If the data type is not supported
    """
    if isinstance(data, Cursor):
        return data
    elif isinstance(data, Mapping):
        return from_mapping(data)
    elif isinstance(data, queue.Queue):
        return from_queue(data)
    elif isinstance(data, Sequence):
        return from_sequence(data)
    elif isinstance(data, Iterable):
        return from_iterable(data)
    else:
        raise TypeError(f"Cannot build a cursor from {type(data).__name__}")
