"""
Producer implementations for common data sources.

Producers are advancers that read one element at a time from an existing
container or stream. They are wrapped into cursors by the constructors in
``pulliter.adapters``.
"""

from __future__ import annotations

import queue
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, TypeVar

from .pair import Pair

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class _Closed:
    """Marker type for the end of a queue stream."""

    _instance: _Closed | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLOSED"


# Put onto a queue by its producer to signal that nothing more will be sent
CLOSED = _Closed()

# Queue.shutdown() (Python 3.13+) also ends a queue stream
_QUEUE_SHUTDOWN: tuple[type[BaseException], ...] = (
    (queue.ShutDown,) if hasattr(queue, "ShutDown") else ()
)


class SequenceProducer[T]:
    """
    Producer for list-like sequences.

    Yields ``data[start]`` up to ``data[end - 1]`` by position.
    """

    def __init__(self, data: Sequence[T], start: int = 0, end: int | None = None):
        """
        Create a sequence producer.

        Args:
            data: The sequence to iterate over
            start: Starting index (inclusive)
            end: Ending index (exclusive), or None for end of sequence
        """
        self.data = data
        self.start = start
        self.end = end if end is not None else len(data)

        if self.start < 0 or self.start > len(data):
            raise ValueError(f"Invalid start index: {self.start}")
        if self.end < 0 or self.end > len(data):
            raise ValueError(f"Invalid end index: {self.end}")
        if self.start > self.end:
            raise ValueError(f"Start index {self.start} > end index {self.end}")

        self.index = self.start

    def advance(self) -> tuple[T | None, bool]:
        if self.index >= self.end:
            return None, False
        value = self.data[self.index]
        self.index += 1
        return value, True


class QueueProducer[T]:
    """
    Producer receiving elements from a queue fed by other threads.

    ``advance`` blocks until an element arrives. The stream ends when the
    producer puts ``CLOSED`` on the queue (or shuts the queue down). Only the
    reading side of the queue is used; anything put after ``CLOSED`` is
    never read.
    """

    def __init__(self, source: queue.Queue[T] | Any):
        self.source = source

    def advance(self) -> tuple[T | None, bool]:
        try:
            value = self.source.get()
        except _QUEUE_SHUTDOWN:
            return None, False
        if value is CLOSED:
            return None, False
        return value, True


class MappingProducer[K, V]:
    """
    Producer for the entries, keys or values of a mapping.

    Order follows the mapping's own iteration order, which is not part of
    the contract. Mutating the mapping while the producer is in use is not
    supported; for a dict, Python raises RuntimeError from the next advance.
    """

    ENTRIES = "entries"
    KEYS = "keys"
    VALUES = "values"

    def __init__(self, data: Mapping[K, V] | None, mode: str = ENTRIES):
        """
        Create a mapping producer.

        Args:
            data: The mapping to iterate over; None behaves like an empty one
            mode: One of ENTRIES, KEYS or VALUES
        """
        if data is None:
            data = {}
        if mode == self.ENTRIES:
            self._iterator: Iterator[Any] = iter(data.items())
        elif mode == self.KEYS:
            self._iterator = iter(data.keys())
        elif mode == self.VALUES:
            self._iterator = iter(data.values())
        else:
            raise ValueError(f"Unknown mapping producer mode: {mode!r}")
        self.mode = mode

    def advance(self) -> tuple[Any, bool]:
        try:
            item = next(self._iterator)
        except StopIteration:
            return None, False
        if self.mode == self.ENTRIES:
            return Pair(*item), True
        return item, True


class BytesProducer:
    """Producer yielding the raw 8-bit code units of a byte string, in order."""

    def __init__(self, data: bytes | bytearray | memoryview):
        self.data = bytes(data)
        self.index = 0

    def advance(self) -> tuple[int | None, bool]:
        if self.index >= len(self.data):
            return None, False
        value = self.data[self.index]
        self.index += 1
        return value, True


def _utf8_length(lead: int) -> int:
    """Encoded length implied by a UTF-8 lead byte, or 0 if it cannot start one."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


class Utf8Producer:
    """
    Producer decoding UTF-8 encoded bytes one codepoint at a time.

    Each element is a one-character string. An invalid or truncated
    sequence ends the iteration; the bytes before it are still produced.
    """

    def __init__(self, data: bytes | bytearray | memoryview):
        self.data = bytes(data)
        self.index = 0

    def advance(self) -> tuple[str | None, bool]:
        if self.index >= len(self.data):
            return None, False
        size = _utf8_length(self.data[self.index])
        if size == 0:
            return None, False
        chunk = self.data[self.index : self.index + size]
        try:
            char = chunk.decode("utf-8")
        except UnicodeDecodeError:
            # Overlong forms, surrogates and truncated input all end here
            return None, False
        self.index += size
        return char, True


class IterableProducer[T]:
    """Producer pulling from an arbitrary Python iterable."""

    def __init__(self, data: Iterable[T]):
        self._iterator = iter(data)

    def advance(self) -> tuple[T | None, bool]:
        try:
            return next(self._iterator), True
        except StopIteration:
            return None, False
