"""
Tests for the core cursor protocol and its built-in operations.
"""

import pytest
from conftest import FIBONACCI, CallCounter

from pulliter import Cursor, empty, from_sequence, natural_order, new, with_prealloc


class TestCursorProtocol:
    """Tests for the advance/current state machine."""

    def test_empty_cursor(self):
        """Test a cursor whose function reports no elements."""
        cursor = new(lambda: (0, False))
        assert cursor.advance() is False
        assert cursor.exhausted

    def test_calls_after_stop(self):
        """Test that current() never raises, before or after exhaustion."""
        cursor = new(lambda: (0, False))
        assert cursor.current() is None
        cursor.advance()
        cursor.current()
        assert cursor.advance() is False
        cursor.current()

    def test_cursor_rejects_cursor_argument(self):
        """Test that wrapping a cursor in Cursor() raises a clear TypeError."""
        with pytest.raises(TypeError, match="into_cursor"):
            Cursor(from_sequence([1]))

    def test_exhaustion_is_absorbing(self):
        """Test that the advancer is not called again after exhaustion."""
        counter = CallCounter([1, 2])
        cursor = Cursor(counter)
        assert cursor.count() == 2
        assert counter.calls == 3
        for _ in range(5):
            assert cursor.advance() is False
        assert counter.calls == 3

    def test_no_resurrection(self):
        """Test that a source producing again after stopping is not read."""
        responses = iter([(1, True), (None, False), (2, True)])
        cursor = new(lambda: next(responses))
        assert cursor.collect() == [1]
        assert cursor.advance() is False

    def test_current_tracks_advance(self):
        """Test that current() returns the last produced element."""
        cursor = from_sequence(["a", "b"])
        assert cursor.advance()
        assert cursor.current() == "a"
        assert cursor.advance()
        assert cursor.current() == "b"

    def test_fibonacci_iteration(self, fib):
        """Test manual advance/current iteration."""
        cursor = fib()
        result = []
        while cursor.advance():
            result.append(cursor.current())
        assert result == FIBONACCI

    def test_python_iteration(self, fib):
        """Test that cursors work in for loops and builtins."""
        assert list(fib()) == FIBONACCI
        assert [x for x in from_sequence([1, 2, 3])] == [1, 2, 3]

    def test_partially_drained_cursor_resumes(self):
        """Test that a partially drained cursor continues where it stopped."""
        cursor = from_sequence(range(6))
        assert next(cursor) == 0
        assert cursor.advance()
        assert cursor.current() == 1
        assert cursor.collect() == [2, 3, 4, 5]

    def test_empty_helper(self):
        """Test the empty() constructor."""
        cursor = empty()
        assert cursor.advance() is False
        assert cursor.collect() == []


class TestTerminalOperations:
    """Tests for draining operations."""

    def test_count(self, fib):
        """Test count operation."""
        assert fib().count() == len(FIBONACCI)

    def test_count_then_advance(self, fib):
        """Test that advance is False after count drained the cursor."""
        cursor = fib()
        cursor.count()
        assert cursor.advance() is False

    def test_collect(self, fib):
        """Test collect preserves order."""
        assert fib().collect() == FIBONACCI

    def test_collect_prealloc_does_not_change_output(self, fib):
        """Test that the preallocation hint only affects capacity."""
        assert fib().collect(with_prealloc(len(FIBONACCI))) == FIBONACCI
        assert fib().collect(with_prealloc(3)) == FIBONACCI
        assert fib().collect(with_prealloc(1000)) == FIBONACCI
        assert fib().collect(with_prealloc(-5)) == FIBONACCI
        assert empty().collect(with_prealloc(10)) == []

    def test_reduce(self):
        """Test left fold in yield order."""
        result = from_sequence(["a", "b", "c"]).reduce("", lambda acc, x: acc + x)
        assert result == "abc"

    def test_reduce_empty(self):
        """Test that reduce on an empty cursor returns the initial value."""
        assert empty().reduce(42, lambda acc, x: acc + x) == 42

    def test_all(self, fib):
        """Test all with passing and failing predicates."""
        assert fib().all(lambda x: x >= 0) is True
        assert fib().all(lambda x: x < 100) is False
        assert empty().all(lambda x: False) is True

    def test_all_short_circuits(self):
        """Test that all stops at the first failing element."""
        cursor = from_sequence([1, 2, -1, 3, 4])
        assert cursor.all(lambda x: x > 0) is False
        assert cursor.collect() == [3, 4]

    def test_any(self, fib):
        """Test any with passing and failing predicates."""
        assert fib().any(lambda x: x == 21) is True
        assert fib().any(lambda x: x < 0) is False
        assert empty().any(lambda x: True) is False

    def test_any_short_circuits(self):
        """Test that any stops at the first passing element."""
        cursor = from_sequence([1, 2, 3, 4])
        assert cursor.any(lambda x: x == 2) is True
        assert cursor.collect() == [3, 4]

    def test_find(self, fib):
        """Test find for found and missing elements."""
        assert fib().find(lambda n: n > 0 and n % 3 == 0 and n % 7 == 0) == (21, True)
        assert fib().find(lambda n: n < 0) == (None, False)

    def test_range_stops_when_visitor_returns_false(self):
        """Test that range stops as soon as the visitor says so."""
        seen = []

        def visit(x):
            seen.append(x)
            return x < 3

        cursor = from_sequence([1, 2, 3, 4, 5])
        cursor.range(visit)
        assert seen == [1, 2, 3]
        assert cursor.collect() == [4, 5]

    def test_range_visits_everything(self):
        """Test range over a whole cursor."""
        seen = []
        from_sequence([1, 2, 3]).range(lambda x: seen.append(x) or True)
        assert seen == [1, 2, 3]

    def test_for_each(self):
        """Test for_each visits every element."""
        seen = []
        from_sequence([1, 2, 3]).for_each(seen.append)
        assert seen == [1, 2, 3]

    def test_sum(self, fib):
        """Test sum operation."""
        assert fib().sum() == sum(FIBONACCI)
        assert empty().sum() == 0
        assert from_sequence([1.5, 2.5]).sum(1) == 5.0


class TestMax:
    """Tests for the max terminal method."""

    def test_max(self, fib):
        """Test max with the natural comparator."""
        assert fib().max() == 6765

    def test_max_custom_comparator(self):
        """Test max with a reversed comparator."""
        result = from_sequence([5, 3, 9, 1]).max(lambda a, b: natural_order(b, a))
        assert result == 1

    def test_max_empty(self):
        """Test that an empty cursor yields None."""
        assert empty().max() is None

    def test_max_ties_first_wins(self):
        """Test that the first of equal maxima is returned."""
        words = ["bb", "aa", "c", "dd"]
        result = from_sequence(words).max(lambda a, b: len(a) - len(b))
        assert result == "bb"


class TestFilterMap:
    """Tests for filter and map."""

    def test_filter(self, fib):
        """Test filter keeps matching elements."""
        result = fib().filter(lambda x: x % 2 == 0).collect()
        assert result == [x for x in FIBONACCI if x % 2 == 0]

    def test_filter_all_out(self):
        """Test filter that removes all elements."""
        cursor = from_sequence(range(10)).filter(lambda x: x > 100)
        assert cursor.collect() == []
        assert cursor.advance() is False

    def test_map(self, fib):
        """Test map operation."""
        assert fib().map(str).collect() == [str(x) for x in FIBONACCI]

    def test_map_round_trip(self, fib):
        """Test that mapping with an inverse restores the sequence."""
        result = fib().map(lambda x: x * 3 + 1).map(lambda x: (x - 1) // 3).collect()
        assert result == FIBONACCI

    def test_operators_are_lazy(self):
        """Test that building a pipeline pulls nothing from the source."""
        counter = CallCounter(range(10))
        cursor = Cursor(counter).map(lambda x: x * 2).filter(lambda x: x > 4).limit(2)
        assert counter.calls == 0
        assert cursor.collect() == [6, 8]
        assert counter.calls == 5

    def test_long_pipeline(self):
        """Test a long pipeline."""
        result = (
            from_sequence(range(100))
            .map(lambda x: x + 1)
            .filter(lambda x: x % 2 == 0)
            .map(lambda x: x * 2)
            .filter(lambda x: x < 100)
            .map(lambda x: x - 1)
            .sum()
        )
        expected = sum(
            ((x + 1) * 2) - 1
            for x in range(100)
            if (x + 1) % 2 == 0 and (x + 1) * 2 < 100
        )
        assert result == expected


class TestLimit:
    """Tests for limit."""

    def test_limit(self, fib):
        """Test limit yields the first n elements."""
        assert fib().limit(5).collect() == FIBONACCI[:5]

    def test_limit_larger_than_source(self, fib):
        """Test limit larger than the source."""
        assert fib().limit(100).collect() == FIBONACCI

    def test_zero_and_negative_limit(self):
        """Test that non-positive limits yield nothing."""
        assert new(lambda: (1, True)).limit(0).advance() is False
        assert new(lambda: (1, True)).limit(-15).advance() is False

    def test_limit_leaves_upstream_positioned(self):
        """Test that the upstream is not advanced past the limit."""
        counter = CallCounter(range(10))
        source = Cursor(counter)
        assert source.limit(3).collect() == [0, 1, 2]
        assert counter.calls == 3
        assert source.collect() == [3, 4, 5, 6, 7, 8, 9]

    def test_limit_on_infinite_source(self):
        """Test limit on a never-ending cursor."""
        assert new(lambda: (7, True)).limit(3).collect() == [7, 7, 7]


class TestWithStep:
    """Tests for with_step."""

    def test_singular_step(self, fib):
        """Test step 1 yields everything."""
        assert fib().with_step(1).collect() == FIBONACCI

    def test_step(self, fib):
        """Test steps starting from the first element."""
        assert fib().with_step(3).collect() == FIBONACCI[::3]
        assert fib().with_step(20).collect() == [0, 6765]

    def test_step_larger_than_source(self, fib):
        """Test that a huge step only yields the first element."""
        assert fib().with_step(1000).collect() == [0]

    def test_non_positive_step(self, fib):
        """Test that non-positive steps yield nothing."""
        assert fib().with_step(0).collect() == []
        assert fib().with_step(-3).collect() == []


class TestDrop:
    """Tests for drop."""

    def test_drop(self, fib):
        """Test drop then collect the rest."""
        cursor = fib()
        assert cursor.drop(12) == 12
        assert cursor.collect() == FIBONACCI[12:]
        assert cursor.drop(1) == 0

    def test_drop_overflow(self, fib):
        """Test dropping more elements than available."""
        cursor = fib()
        assert cursor.drop(120) == len(FIBONACCI)
        assert cursor.collect() == []
        assert cursor.drop(1) == 0

    def test_drop_non_positive(self):
        """Test that non-positive drops do nothing."""
        cursor = from_sequence([1, 2])
        assert cursor.drop(0) == 0
        assert cursor.drop(-2) == 0
        assert cursor.collect() == [1, 2]


class TestSorted:
    """Tests for sorted_by and sorted."""

    def test_sorted_for_sorted_sequence(self, fib):
        """Test sorting already sorted input returns it unchanged."""
        assert fib().sorted(with_prealloc(len(FIBONACCI))).collect() == FIBONACCI

    def test_sorted_shuffled(self):
        """Test sorting shuffled input."""
        shuffled = [144, 0, 6765, 3, 1, 89, 21, 1, 610, 5]
        assert from_sequence(shuffled).sorted().collect() == sorted(shuffled)

    def test_sorted_by_descending(self):
        """Test sorting with a custom 3-way comparator."""
        data = [3, 1, 4, 1, 5, 9, 2, 6]
        result = from_sequence(data).sorted_by(lambda a, b: b - a).collect()
        assert result == sorted(data, reverse=True)

    def test_sorted_by_is_stable(self):
        """Test that equal elements keep their relative order."""
        words = ["bb", "a", "cc", "d", "ee"]
        result = from_sequence(words).sorted_by(lambda a, b: len(a) - len(b)).collect()
        assert result == ["a", "d", "bb", "cc", "ee"]

    def test_sorted_is_lazy_until_first_advance(self):
        """Test that sorting happens on the first advance, then drains everything."""
        counter = CallCounter([3, 2, 1])
        cursor = Cursor(counter).sorted()
        assert counter.calls == 0
        assert cursor.advance()
        assert cursor.current() == 1
        assert counter.calls == 4

    def test_sorted_empty(self):
        """Test sorting an empty cursor."""
        cursor = empty().sorted()
        assert cursor.collect() == []
        assert cursor.advance() is False
