"""
Bucket storage for separate-chaining hash sets.

A BucketArray is a fixed number of slots. Each slot is either absent (None)
or holds a non-empty chain of elements that hashed to that slot. A chain is
created on the first append to its slot and dropped again as soon as its
last element is removed, so a slot is never present-but-empty.
"""

from typing import Iterator, List, Optional, TypeVar, Generic

from .equivalence import Equivalence

T = TypeVar('T')


class BucketArray(Generic[T]):
    """Fixed-capacity array of optional chains."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("BucketArray capacity must be greater than 0")

        self.capacity = capacity
        self._slots: List[Optional[List[T]]] = [None] * capacity

    def index(self, element: Optional[T], equivalence: Equivalence) -> int:
        """
        Slot index for an element.

        None has no meaningful hash, so it always lives in slot 0.
        """
        if element is None:
            return 0
        return abs(equivalence.hash(element)) % self.capacity

    def chain(self, index: int) -> Optional[List[T]]:
        """Chain at a slot, or None if the slot is absent."""
        return self._slots[index]

    def find(self, index: int, element: Optional[T],
             equivalence: Equivalence) -> int:
        """
        Position of an element within the chain at ``index``.

        Returns:
            Position in the chain, or -1 if the slot is absent or the element
            is not in it
        """
        chain = self._slots[index]
        if chain is None:
            return -1

        for pos, existing in enumerate(chain):
            # identity first: an element is always a member of itself (NaN)
            if existing is element:
                return pos
            if existing is not None and element is not None \
                    and equivalence.equals(existing, element):
                return pos

        return -1

    def append(self, index: int, element: Optional[T]) -> None:
        """Append to the chain at ``index``, creating the chain if needed."""
        chain = self._slots[index]
        if chain is None:
            chain = self._slots[index] = []
        chain.append(element)

    def remove(self, index: int, element: Optional[T],
               equivalence: Equivalence) -> bool:
        """
        Remove an element from the chain at ``index``.

        The slot is reset to absent when its chain becomes empty.

        Returns:
            True if an element was removed
        """
        pos = self.find(index, element, equivalence)
        if pos < 0:
            return False

        chain = self._slots[index]
        del chain[pos]
        if not chain:
            self._slots[index] = None
        return True

    def next_occupied(self, start: int) -> int:
        """First occupied slot at or after ``start``, or capacity if none."""
        for index in range(start, self.capacity):
            if self._slots[index] is not None:
                return index
        return self.capacity

    def lengths(self) -> List[int]:
        """Chain length per slot (0 for absent slots)."""
        return [0 if chain is None else len(chain) for chain in self._slots]

    def __iter__(self) -> Iterator[Optional[T]]:
        """Iterate elements slot by slot (no modification checks)."""
        for chain in self._slots:
            if chain is not None:
                yield from chain

    def __len__(self) -> int:
        """Number of slots."""
        return self.capacity

    def __repr__(self) -> str:
        occupied = sum(1 for chain in self._slots if chain is not None)
        return f"BucketArray(capacity={self.capacity}, occupied={occupied})"
