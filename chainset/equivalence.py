"""
Hash/equality capabilities used by hash sets to place and compare elements.

A set never calls ``hash()`` or ``==`` on its elements directly. Instead it is
handed an Equivalence at construction time and routes every bucket index and
every membership comparison through it.
"""

import hashlib
import operator
from typing import Any, Callable, Generic, Optional, TypeVar, Union

import numpy as np

T = TypeVar('T')


class Equivalence(Generic[T]):
    """
    A pair of functions defining element identity for a set.

    Args:
        hash_fn: Maps an element to an integer. Equal elements must map to
            the same integer.
        equals_fn: Returns True if two elements are the same set member.
        name: Label used in repr().
    """

    def __init__(self, hash_fn: Callable[[T], int] = hash,
                 equals_fn: Callable[[T, T], bool] = operator.eq,
                 name: Optional[str] = None):
        self._hash_fn = hash_fn
        self._equals_fn = equals_fn
        self.name = name or getattr(hash_fn, '__name__', 'custom')

    def hash(self, element: T) -> int:
        """Hash an element to an integer."""
        return int(self._hash_fn(element))

    def equals(self, a: T, b: T) -> bool:
        """Compare two non-None elements."""
        return bool(self._equals_fn(a, b))

    def __repr__(self) -> str:
        return f"Equivalence({self.name})"


class DigestEquivalence(Equivalence[Any]):
    """
    Equivalence over the binary encoding of elements under a numpy dtype.

    Hashes are the first 8 bytes of a SHA-256 digest, so they are stable
    across interpreter runs (unlike ``hash()`` on str, which is salted).
    Two elements are equal when their encodings under ``dtype`` are equal.
    """

    def __init__(self, dtype: Union[np.dtype, str, type]):
        self.dtype = np.dtype(dtype)
        super().__init__(self._digest, self._encoded_equal,
                         name=f"digest[{self.dtype}]")

    def _encode(self, element: Any) -> bytes:
        if isinstance(element, str):
            return element.encode('utf-8')
        if isinstance(element, bytes):
            return element
        return np.array([element], dtype=self.dtype).tobytes()

    def _digest(self, element: Any) -> int:
        hash_obj = hashlib.sha256(self._encode(element))
        return int.from_bytes(hash_obj.digest()[:8], 'little')

    def _encoded_equal(self, a: Any, b: Any) -> bool:
        if isinstance(a, (str, bytes)) or isinstance(b, (str, bytes)):
            return type(a) is type(b) and a == b
        return np.array_equal(np.array([a], dtype=self.dtype),
                              np.array([b], dtype=self.dtype))


# Python's own hash() and ==
NATURAL: Equivalence[Any] = Equivalence(hash, operator.eq, name="natural")

# Object identity: distinct objects are distinct members even if they compare equal
IDENTITY: Equivalence[Any] = Equivalence(id, operator.is_, name="identity")


__all__ = ["Equivalence", "DigestEquivalence", "NATURAL", "IDENTITY"]
