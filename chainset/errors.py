"""
Error types raised by chainset containers.
"""


class ChainSetError(Exception):
    """Base class for all chainset errors."""


class InvalidArgumentError(ChainSetError, ValueError):
    """Raised when a set is constructed with an invalid capacity or load factor."""


class IncompatibleTypeError(ChainSetError, TypeError):
    """Raised when an element does not match the set's element dtype."""


class ArrayStoreError(ChainSetError, TypeError):
    """Raised when an element cannot be stored in the buffer passed to to_array()."""


class NoSuchElementError(ChainSetError, StopIteration):
    """Raised by an iterator that has no remaining elements."""


class ConcurrentModificationError(ChainSetError, RuntimeError):
    """Raised when a set is structurally modified underneath an iterator."""
