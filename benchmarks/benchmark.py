"""
Benchmarks comparing pulliter cursors with plain generator pipelines.

Cursors trade some speed for an explicit advance/current protocol; these
numbers show how much per-element overhead each pipeline shape carries:
    python benchmarks/benchmark.py
"""

import itertools
import time
from collections.abc import Callable
from typing import Any

from pulliter import (
    batched,
    chain,
    from_sequence,
    set_default_prealloc,
    with_prealloc,
)

# ---------------------------------------------------------------------------
# Module-level worker functions
# ---------------------------------------------------------------------------


def _square(x: int) -> int:
    return x * x


def _double(x: int) -> int:
    return x * 2


def _increment(x: int) -> int:
    return x + 1


def _is_even(x: int) -> bool:
    return x % 2 == 0


def _divisible_by_3(x: int) -> bool:
    return x % 3 == 0


def _compare(a: int, b: int) -> int:
    return (a > b) - (a < b)


# ---------------------------------------------------------------------------
# Benchmark harness
# ---------------------------------------------------------------------------


def benchmark(
    name: str,
    cursor_fn: Callable[[], Any],
    generator_fn: Callable[[], Any],
    iterations: int = 3,
):
    """
    Benchmark a cursor pipeline against its generator equivalent.

    Args:
        name: Name of the benchmark
        cursor_fn: Function using pulliter cursors
        generator_fn: Function using builtins and generators
        iterations: Number of times to run each function

    Returns:
        Ratio of cursor time to generator time
    """
    print(f"\n{'=' * 60}")
    print(f"Benchmark: {name}")
    print(f"{'=' * 60}")

    # Both sides must agree before timing means anything
    if cursor_fn() != generator_fn():
        raise AssertionError(f"{name}: cursor and generator results differ")

    cursor_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        cursor_fn()
        cursor_times.append(time.perf_counter() - start)

    generator_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        generator_fn()
        generator_times.append(time.perf_counter() - start)

    avg_cursor = sum(cursor_times) / len(cursor_times)
    avg_generator = sum(generator_times) / len(generator_times)
    overhead = avg_cursor / avg_generator

    print(f"Cursor (avg):    {avg_cursor:.4f} seconds")
    print(f"Generator (avg): {avg_generator:.4f} seconds")
    print(f"Overhead:        {overhead:.2f}x")

    return overhead


# ---------------------------------------------------------------------------
# Individual benchmarks
# ---------------------------------------------------------------------------


def bench_sum_of_squares():
    """Benchmark: Sum of squares."""
    data = list(range(1_000_000))

    def cursor():
        return from_sequence(data).map(_square).sum()

    def generator():
        return sum(x * x for x in data)

    return benchmark("Sum of Squares", cursor, generator)


def bench_complex_pipeline():
    """Benchmark: Multi-stage pipeline."""
    data = list(range(1_000_000))

    def cursor():
        return (
            from_sequence(data)
            .map(_double)
            .filter(_divisible_by_3)
            .map(_increment)
            .limit(100_000)
            .collect()
        )

    def generator():
        stage = ((x * 2) + 1 for x in data if (x * 2) % 3 == 0)
        return list(itertools.islice(stage, 100_000))

    return benchmark("Complex Pipeline", cursor, generator)


def bench_collect_prealloc():
    """Benchmark: Collect with and without a preallocation hint."""
    data = list(range(1_000_000))

    def cursor():
        return from_sequence(data).collect(with_prealloc(len(data)))

    def generator():
        return list(iter(data))

    return benchmark("Collect (preallocated)", cursor, generator)


def bench_batched():
    """Benchmark: Batching and chaining."""
    data = list(range(500_000))

    def cursor():
        return batched(chain(from_sequence(data), from_sequence(data)), 64).count()

    def generator():
        return sum(1 for _ in itertools.batched(itertools.chain(data, data), 64))

    return benchmark("Batched Chain", cursor, generator)


def bench_sorted():
    """Benchmark: Sorting with a 3-way comparator."""
    data = [(x * 7919) % 100_003 for x in range(200_000)]

    def cursor():
        return from_sequence(data).filter(_is_even).sorted_by(_compare).limit(10).collect()

    def generator():
        return sorted(x for x in data if x % 2 == 0)[:10]

    return benchmark("Filtered Sort", cursor, generator)


def main():
    """Run all benchmarks."""
    print("pulliter Benchmarks")
    print("=" * 60)
    print("These benchmarks compare cursors with generator pipelines.")
    print("=" * 60)

    set_default_prealloc(0)

    overheads = []
    overheads.append(bench_sum_of_squares())
    overheads.append(bench_complex_pipeline())
    overheads.append(bench_collect_prealloc())
    overheads.append(bench_batched())
    overheads.append(bench_sorted())

    print(f"\n{'=' * 60}")
    print("Summary")
    print(f"{'=' * 60}")
    avg_overhead = sum(overheads) / len(overheads)
    print(f"Average overhead: {avg_overhead:.2f}x")
    print(f"Best overhead:    {min(overheads):.2f}x")
    print(f"Worst overhead:   {max(overheads):.2f}x")


if __name__ == "__main__":
    main()
