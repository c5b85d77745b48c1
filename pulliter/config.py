"""
Configuration for buffer allocation in draining operations.

This module manages the global allocation defaults and provides the
``with_prealloc`` option accepted by operations that buffer elements
(collect, sorting, cycling, deduplication). Allocation settings
are performance hints only and never change what a cursor yields.
"""

from __future__ import annotations

import os
import threading
import warnings
from collections.abc import Callable


class AllocationConfig:
    """
    Global configuration for buffer allocation.

    The default preallocation size is read once from the
    ``PULLITER_PREALLOC`` environment variable and can be changed at runtime.
    """

    _instance: AllocationConfig | None = None
    _lock = threading.Lock()

    def __init__(self):
        self._default_prealloc: int | None = None

    @classmethod
    def global_config(cls) -> AllocationConfig:
        """Get the global allocation configuration instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = AllocationConfig()
        return cls._instance

    @property
    def default_prealloc(self) -> int:
        """
        Buffer size reserved when an operation receives no prealloc option.

        Returns:
            Default preallocation size (defaults to 0)
        """
        if self._default_prealloc is None:
            env_prealloc = os.environ.get("PULLITER_PREALLOC")
            value = 0
            if env_prealloc:
                try:
                    value = int(env_prealloc)
                except ValueError:
                    warnings.warn(
                        f"Ignoring PULLITER_PREALLOC={env_prealloc!r}: "
                        "not an integer.",
                        RuntimeWarning,
                        stacklevel=2,
                    )
                else:
                    if value < 0:
                        warnings.warn(
                            f"Ignoring PULLITER_PREALLOC={env_prealloc!r}: "
                            "must not be negative.",
                            RuntimeWarning,
                            stacklevel=2,
                        )
                        value = 0
            self._default_prealloc = value

        return self._default_prealloc

    @default_prealloc.setter
    def default_prealloc(self, value: int) -> None:
        """Set the default preallocation size."""
        if value < 0:
            raise ValueError("Preallocation size must not be negative")
        with self._lock:
            self._default_prealloc = value

    def reset(self) -> None:
        """Forget the configured default so it is re-read from the environment."""
        with self._lock:
            self._default_prealloc = None


class AllocOptions:
    """Resolved allocation options for a single draining operation."""

    __slots__ = ("prealloc_size",)

    def __init__(self, prealloc_size: int):
        self.prealloc_size = prealloc_size

    @classmethod
    def resolve(cls, opts: tuple[AllocationOption, ...]) -> AllocOptions:
        """
        Apply option callables on top of the global defaults.

        Args:
            opts: Options as returned by ``with_prealloc``

        Returns:
            The resolved options
        """
        options = cls(_global_config.default_prealloc)
        for opt in opts:
            opt(options)
        return options


type AllocationOption = Callable[[AllocOptions], None]


def with_prealloc(prealloc: int) -> AllocationOption:
    """
    Set the preallocation size (capacity) for buffers allocated by an operation.

    Negative sizes are clamped to zero.

    Args:
        prealloc: Expected number of buffered elements

    Example:
        >>> from pulliter import from_sequence, with_prealloc
        >>> from_sequence([3, 1, 2]).collect(with_prealloc(3))
        [3, 1, 2]
    """

    def apply(options: AllocOptions) -> None:
        options.prealloc_size = max(0, prealloc)

    return apply


# Global configuration instance
_global_config = AllocationConfig.global_config()


def set_default_prealloc(prealloc: int) -> None:
    """
    Set the global default preallocation size.

    Args:
        prealloc: Buffer size to reserve (must be >= 0)

    Raises:
        ValueError: If prealloc < 0
    """
    _global_config.default_prealloc = prealloc


def get_default_prealloc() -> int:
    """Get the current global default preallocation size."""
    return _global_config.default_prealloc
