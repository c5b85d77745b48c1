"""
pulliter - Lazy, pull-based cursors for Python

A small iteration library: sources are adapted into cursors, cursors are
wrapped by composition operators into pipelines, and terminal operations
drive the pipeline one element at a time.
"""

from . import fallible
from .adapters import (
    close_queue,
    from_ascii,
    from_iterable,
    from_mapping,
    from_mapping_keys,
    from_mapping_values,
    from_queue,
    from_sequence,
    from_utf8,
    into_cursor,
)
from .combinators import (
    batched,
    chain,
    cycle,
    enumerate_cursor,
    find,
    map_cursor,
    max_of,
    min_of,
    repeat,
    sorted_cursor,
    sum_of,
    uniq,
    uniq_func,
    zip_cursors,
)
from .config import (
    AllocationConfig,
    get_default_prealloc,
    set_default_prealloc,
    with_prealloc,
)
from .core import Cursor, empty, natural_order, new
from .pair import Enumeration, Pair
from .producers import CLOSED

__version__ = "0.1.0"

__all__ = [
    "Cursor",
    "new",
    "empty",
    "natural_order",
    "Pair",
    "Enumeration",
    "from_sequence",
    "from_queue",
    "close_queue",
    "CLOSED",
    "from_mapping",
    "from_mapping_keys",
    "from_mapping_values",
    "from_ascii",
    "from_utf8",
    "from_iterable",
    "into_cursor",
    "chain",
    "zip_cursors",
    "map_cursor",
    "enumerate_cursor",
    "batched",
    "repeat",
    "cycle",
    "uniq",
    "uniq_func",
    "sorted_cursor",
    "max_of",
    "min_of",
    "sum_of",
    "find",
    "fallible",
    "AllocationConfig",
    "with_prealloc",
    "set_default_prealloc",
    "get_default_prealloc",
]
