"""
Basic usage examples for pulliter.

This demonstrates the core functionality of the cursor library.
"""

import math
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from pulliter import (
    batched,
    close_queue,
    fallible,
    from_mapping_keys,
    from_queue,
    from_sequence,
    from_utf8,
    map_cursor,
    sum_of,
    zip_cursors,
)


def example_map_reduce():
    """Example: Map and reduce operations."""
    print("=== Map and Reduce Example ===")

    data = [6, 10, 7, 12, 6, 14, 8, 13, 10, 14]
    avg = sum_of(from_sequence(data)) / len(data)

    # Sum of squared deviations, then sample standard deviation
    stddev = map_cursor(from_sequence(data), float).reduce(
        0.0, lambda acc, x: acc + (x - avg) ** 2
    )
    stddev = math.sqrt(stddev / (len(data) - 1))
    print(f"data: {data}")
    print(f"standard deviation: {stddev:.2f}")


def example_queue_pipeline():
    """Example: Map and filter messages received from another thread."""
    print("\n=== Queue Pipeline Example ===")

    fraudulent = "1"
    messages = [
        ("2---3", 15),
        ("3---1", 15),
        ("5---6", 13),
        ("7---8", 5),
        ("4---1", 10),
        ("1---0", 25),
    ]

    q = queue.Queue()

    def consume_broker():
        for message in messages:
            q.put(message)
        close_queue(q)

    producer = threading.Thread(target=consume_broker)
    producer.start()

    def to_transaction(message):
        sender, receiver = message[0].split("---", 1)
        return {"from": sender, "to": receiver, "amount": message[1]}

    def alert(tx):
        print("!!!FOUND FRAUD TRANSACTION!!!")
        print(f"From: {tx['from']!r} To: {tx['to']!r} Amount: {tx['amount']}")
        return True

    (
        from_queue(q)
        .map(to_transaction)
        .filter(lambda tx: fraudulent in (tx["from"], tx["to"]))
        .range(alert)
    )
    producer.join()


def example_batched_workers():
    """Example: Read batches on one thread, process them on a worker pool."""
    print("\n=== Batched Worker Pool Example ===")

    values = {i % 40_000: None for i in range(1_000_000)}
    batches = batched(
        from_mapping_keys(values).filter(lambda n: n % 4 == 0),
        2500,
    )

    def process(batch):
        # Long processing imitation
        time.sleep(len(batch) / 1_000_000)
        return len(batch)

    with ThreadPoolExecutor(max_workers=4) as pool:
        for processed in pool.map(process, batches):
            print(f"processed {processed} items")


def example_text_and_errors():
    """Example: Text decoding and fallible parsing."""
    print("\n=== Text and Errors Example ===")

    decoded = from_utf8("naïve café".encode("utf-8") + b"\xff ignored").collect()
    print(f"Decoded until invalid byte: {''.join(decoded)!r}")

    numbers = fallible.map_fallible(from_sequence(["1", "2", "3"]), int)
    values, error = numbers.collect_until_error()
    print(f"Parsed: {values}, error: {error}")

    numbers = fallible.map_fallible(from_sequence(["1", "two", "3"]), int)
    values, error = numbers.collect_until_error()
    print(f"Parsed: {values}, error: {error}")


def example_zip_cycle():
    """Example: Zipping a finite cursor with an infinite one."""
    print("\n=== Zip and Cycle Example ===")

    names = from_sequence(["alice", "bob", "carol", "dave", "erin"])
    teams = from_sequence(["red", "blue"]).cycle()
    for name, team in zip_cursors(names, teams):
        print(f"{name} -> {team}")


if __name__ == "__main__":
    example_map_reduce()
    example_queue_pipeline()
    example_batched_workers()
    example_text_and_errors()
    example_zip_cycle()
