"""
Shared fixtures for cursor tests.
"""

import pytest

from pulliter import new

FIBONACCI = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89,
             144, 233, 377, 610, 987, 1597, 2584, 4181, 6765]


def fibonacci_cursor(limit=10000):
    """Cursor over Fibonacci numbers not exceeding limit, built from a function."""
    a, b = 0, 1

    def advance():
        nonlocal a, b
        if a > limit:
            return 0, False
        value = a
        a, b = b, a + b
        return value, True

    return new(advance)


class CallCounter:
    """Advancer over a list that records how often it was advanced."""

    def __init__(self, data):
        self.data = list(data)
        self.calls = 0

    def advance(self):
        self.calls += 1
        if self.calls > len(self.data):
            return None, False
        return self.data[self.calls - 1], True


@pytest.fixture
def fib():
    """Factory for fresh Fibonacci cursors."""
    return fibonacci_cursor
