"""
Separate-chaining hash set with automatic resizing and fail-fast iteration.

Elements are placed in a BucketArray by an Equivalence (hash + equals pair).
When the element count exceeds ``capacity * load_factor`` the next insertion
first rebuilds the table at twice the capacity ("refactor"). Iterators are
bound to the set's modification counter and fail on their next step once the
set has been structurally modified.
"""

import logging
from typing import Any, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

import numpy as np

from .buckets import BucketArray
from .config import load_defaults
from .equivalence import Equivalence, NATURAL
from .errors import (
    ArrayStoreError,
    ConcurrentModificationError,
    IncompatibleTypeError,
    InvalidArgumentError,
    NoSuchElementError,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _unsized(dtype: np.dtype) -> bool:
    """True for str/bytes dtypes without a length, e.g. ``np.dtype(str)``."""
    return dtype.kind in 'US' and dtype.itemsize == 0


def _storable(element: Any, dtype: np.dtype) -> bool:
    """
    Check whether a single element can be stored in a dtype unchanged.

    The element must be a scalar of a compatible kind, and converting it to
    ``dtype`` must give back the same value: out-of-range integers and
    strings longer than a fixed-width dtype are rejected.
    """
    if dtype.kind == 'O':
        return True
    if element is None:
        return False
    try:
        value = np.asarray(element)
    except (TypeError, ValueError):
        return False
    if value.ndim != 0:
        return False
    if not np.can_cast(value.dtype, dtype, casting="same_kind"):
        return False
    if _unsized(dtype):
        return True

    try:
        with np.errstate(over='ignore', invalid='ignore'):
            stored = value.astype(dtype)
    except (TypeError, ValueError, OverflowError):
        return False
    if value.dtype.kind in 'fc':
        return bool(np.array_equal(stored, value, equal_nan=True))
    return bool(stored == value)


def _null_of(dtype: np.dtype) -> Any:
    """Padding value for unused trailing slots of a to_array() buffer."""
    if dtype.kind == 'O':
        return None
    return np.zeros((), dtype=dtype)[()]


class HashSet(Generic[T]):
    """
    Mutable, unordered set of unique elements.

    Elements live in chains hanging off a fixed number of bucket slots. The
    set is single-owner: it is not safe to mutate from several threads, and
    any structural change invalidates outstanding iterators.

    Args:
        capacity: Initial number of bucket slots (default 16). Zero is
            accepted and allocates a single slot.
        load_factor: Resize threshold as ``size / capacity`` (default 0.75)
        dtype: Element type tag; anything ``numpy.dtype()`` accepts.
            Defaults to object, which accepts every element.
        equivalence: Hash/equals capability (default: Python hash and ==)
        permits_none: Whether None may be stored

    Raises:
        InvalidArgumentError: If load_factor <= 0 or capacity < 0
        TypeError: If capacity is not an integer
    """

    # Saturation cap for size(). None means use the configured default.
    MAX_SIZE: Optional[int] = None

    def __init__(self, capacity: Optional[int] = None,
                 load_factor: Optional[float] = None, *,
                 dtype: Optional[Union[np.dtype, str, type]] = None,
                 equivalence: Optional[Equivalence] = None,
                 permits_none: bool = True):
        defaults = load_defaults()

        if capacity is None:
            capacity = defaults.capacity
        if load_factor is None:
            load_factor = defaults.load_factor

        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)):
            raise TypeError(f"capacity must be an integer, got {type(capacity).__name__}")

        load_factor = float(load_factor)
        # also rejects NaN
        if not load_factor > 0:
            raise InvalidArgumentError("load factor must be greater than 0")

        if capacity < 0:
            raise InvalidArgumentError("capacity cannot be negative")

        self._load_factor = load_factor
        self._dtype = np.dtype(object if dtype is None else dtype)
        self._equivalence = equivalence or NATURAL
        self._permits_none = permits_none
        self._default_capacity = max(defaults.capacity, 1)
        self._max_size = self.MAX_SIZE if self.MAX_SIZE is not None else defaults.max_size

        self._buckets: BucketArray[T] = BucketArray(max(int(capacity), 1))
        self._size = 0
        self._mod_count = 0
        self._overflow = False
        self._resizing = False

    @classmethod
    def of(cls, items: Iterable[T], **kwargs) -> "HashSet[T]":
        """
        Build a set holding every distinct element of ``items``.

        Keyword arguments are passed to the constructor.
        """
        result = cls(**kwargs)
        result.add_all(items)
        return result

    @property
    def capacity(self) -> int:
        """Current number of bucket slots."""
        return self._buckets.capacity

    @property
    def load_factor(self) -> float:
        """Size-to-capacity ratio above which the next insert resizes."""
        return self._load_factor

    @property
    def dtype(self) -> np.dtype:
        """Element type tag (object accepts every element)."""
        return self._dtype

    @property
    def equivalence(self) -> Equivalence:
        """Hash/equals pair used to place and compare elements."""
        return self._equivalence

    @property
    def permits_none(self) -> bool:
        """Whether None may be stored."""
        return self._permits_none

    @property
    def mod_count(self) -> int:
        """Number of structural modifications so far."""
        return self._mod_count

    def _check_element(self, element: Any) -> None:
        """Raise IncompatibleTypeError if element cannot belong to this set."""
        if element is None:
            if not self._permits_none:
                raise IncompatibleTypeError("This set does not permit None elements")
            return

        if not _storable(element, self._dtype):
            raise IncompatibleTypeError(
                f"Element {element!r} of type {type(element).__name__} "
                f"is incompatible with set dtype {self._dtype}")

    def _check_all(self, items: Iterable[Any]) -> List[Any]:
        """Materialize an argument collection, validating every element first."""
        elements = list(items)
        for element in elements:
            self._check_element(element)
        return elements

    def _locate(self, element: Any) -> Tuple[int, int]:
        """Slot index and chain position of an element (position -1 if absent)."""
        index = self._buckets.index(element, self._equivalence)
        return index, self._buckets.find(index, element, self._equivalence)

    def size(self) -> int:
        """Get current number of elements, saturating at the size cap."""
        return self._max_size if self._overflow else self._size

    def is_empty(self) -> bool:
        """Check if set is empty."""
        return self.size() == 0

    def empty(self) -> bool:
        """Check if set is empty (alias for is_empty)."""
        return self.is_empty()

    def contains(self, element: Any) -> bool:
        """
        Check if element exists in set.

        Raises:
            IncompatibleTypeError: If element does not match the set dtype
        """
        self._check_element(element)
        return self._locate(element)[1] >= 0

    def add(self, element: T) -> bool:
        """
        Add an element to the set.

        If the table is over its load factor, it is resized before the new
        element is placed.

        Returns:
            True if the element was inserted, False if it was already present

        Raises:
            IncompatibleTypeError: If element does not match the set dtype
        """
        self._check_element(element)

        if self._locate(element)[1] >= 0:
            return False

        if not self._resizing and self._size > self.capacity * self._load_factor:
            self.refactor()

        index = self._buckets.index(element, self._equivalence)
        self._buckets.append(index, element)
        self._size += 1
        self._mod_count += 1

        if not self._overflow and self._size >= self._max_size:
            self._overflow = True
            logger.warning("Hash set reached %d elements; size() now saturates", self._max_size)

        return True

    def insert(self, element: T) -> bool:
        """Add an element to the set (alias for add)."""
        return self.add(element)

    def remove(self, element: Any) -> bool:
        """
        Remove an element from the set.

        Returns:
            True if element was found and removed

        Raises:
            IncompatibleTypeError: If element does not match the set dtype
        """
        self._check_element(element)

        index = self._buckets.index(element, self._equivalence)
        if not self._buckets.remove(index, element, self._equivalence):
            return False

        self._size -= 1
        self._mod_count += 1
        return True

    def erase(self, element: Any) -> bool:
        """Remove an element from the set (alias for remove)."""
        return self.remove(element)

    def discard(self, element: Any) -> None:
        """Remove an element from the set if present (no error if not found)."""
        self.remove(element)

    def refactor(self) -> None:
        """
        Rebuild the table at twice its capacity.

        Every element is re-inserted through add(), so chain placement and
        the size/overflow bookkeeping are recomputed for the new capacity.
        The rebuild does not count as a modification: it leaves mod_count
        unchanged.
        """
        snapshot = self.to_list()
        old_capacity = self.capacity
        mod_count = self._mod_count

        self._buckets = BucketArray(old_capacity * 2)
        self._size = 0
        self._overflow = False
        self._resizing = True
        try:
            for element in snapshot:
                self.add(element)
        finally:
            self._resizing = False
            self._mod_count = mod_count

        logger.debug("Resized hash set from %d to %d buckets (%d elements)",
                     old_capacity, self.capacity, len(snapshot))

    def clear(self) -> None:
        """Remove all elements and reset the table to its default capacity."""
        self._buckets = BucketArray(self._default_capacity)
        self._size = 0
        self._overflow = False
        self._mod_count += 1
        logger.debug("Cleared hash set; capacity reset to %d", self._default_capacity)

    def contains_all(self, items: Iterable[Any]) -> bool:
        """
        Check if every element of ``items`` is in the set.

        Returns:
            True if ``items`` is empty or all of its elements are present
        """
        elements = self._check_all(items)
        for element in elements:
            if self._locate(element)[1] < 0:
                return False
        return True

    def add_all(self, items: Iterable[T]) -> bool:
        """
        Add every element of ``items`` (set union).

        Returns:
            True if the set changed
        """
        elements = self._check_all(items)
        before = self._mod_count
        for element in elements:
            self.add(element)
        return self._mod_count != before

    def retain_all(self, items: Iterable[Any]) -> bool:
        """
        Keep only elements that are also in ``items`` (set intersection).

        Membership in ``items`` is judged with this set's equivalence.

        Returns:
            True if the set changed
        """
        elements = self._check_all(items)
        keep: HashSet[Any] = HashSet(max(len(elements), 1),
                                     equivalence=self._equivalence)
        for element in elements:
            keep.add(element)

        before = self._mod_count
        for element in self.to_list():
            if element not in keep:
                self.remove(element)
        return self._mod_count != before

    def remove_all(self, items: Iterable[Any]) -> bool:
        """
        Remove every element of ``items`` that is in the set (set difference).

        Returns:
            True if the set changed
        """
        elements = self._check_all(items)
        before = self._mod_count
        for element in elements:
            self.remove(element)
        return self._mod_count != before

    def iterator(self) -> "HashSetIterator[T]":
        """Get a fail-fast iterator over the set."""
        return HashSetIterator(self)

    def to_list(self) -> List[T]:
        """Elements as a new list, in iteration order."""
        return list(self.iterator())

    def to_array(self, buffer: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Copy elements into a numpy array.

        Args:
            buffer: Optional 1-D array to fill. If it is too short, a new
                array of the same dtype is allocated instead. If it is too
                long, trailing slots are padded with None (object dtype) or
                zero/empty values.

        Returns:
            The array holding the elements; a new array of the set dtype if
            no buffer was passed. An unsized str/bytes set dtype is widened
            to the longest element.

        Raises:
            ArrayStoreError: If an element cannot be stored in the buffer
                dtype (or the set dtype, without a buffer). Nothing is
                written in that case.
            TypeError: If buffer is not a numpy array
            ValueError: If buffer is not 1-D
        """
        elements = self.to_list()

        if buffer is not None:
            if not isinstance(buffer, np.ndarray):
                raise TypeError(f"buffer must be a numpy array, got {type(buffer).__name__}")
            if buffer.ndim != 1:
                raise ValueError(f"buffer must be 1-D, got {buffer.ndim} dimensions")

        target = self._dtype if buffer is None else buffer.dtype
        for element in elements:
            if not _storable(element, target):
                raise ArrayStoreError(
                    f"Element {element!r} cannot be stored in an array of dtype {target}")

        if buffer is None:
            if _unsized(target):
                # let numpy size str/bytes to the longest element
                return np.array(elements, dtype=target.kind)
            buffer = np.empty(len(elements), dtype=target)
        elif len(buffer) < len(elements):
            buffer = np.empty(len(elements), dtype=buffer.dtype)

        for i, element in enumerate(elements):
            buffer[i] = element
        if len(buffer) > len(elements):
            buffer[len(elements):] = _null_of(buffer.dtype)

        return buffer

    def bucket_lengths(self) -> List[int]:
        """Chain length of every bucket slot (0 for empty slots)."""
        return self._buckets.lengths()

    def __iter__(self) -> "HashSetIterator[T]":
        return self.iterator()

    def __len__(self) -> int:
        """Get number of elements (len() support)."""
        return self.size()

    def __contains__(self, element: Any) -> bool:
        """Check membership (in operator); incompatible elements are never members."""
        try:
            return self.contains(element)
        except IncompatibleTypeError:
            return False

    def __bool__(self) -> bool:
        """Check if set is non-empty (bool() support)."""
        return not self.is_empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashSet):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(element in self for element in other)

    __hash__ = None  # mutable

    def __str__(self) -> str:
        """String representation."""
        return (f"HashSet(size={self.size()}, capacity={self.capacity}, "
                f"load_factor={self._load_factor}, dtype={self._dtype})")

    def __repr__(self) -> str:
        """String representation."""
        return self.__str__()


class HashSetIterator(Generic[T]):
    """
    Fail-fast cursor over a HashSet.

    The iterator records the set's modification count when it is created.
    Any add, remove or clear that changes the set after that point makes the
    next call to next() raise ConcurrentModificationError, whether or not
    anything has been read yet. Elements come out by ascending slot, then
    insertion order within a slot; that order is not stable across resizes.
    """

    def __init__(self, owner: HashSet[T]):
        self._owner = owner
        self._buckets = owner._buckets
        self._expected_mod_count = owner._mod_count

        self._slot = self._buckets.next_occupied(0)
        self._pos = 0
        self._has_pending = self._slot < self._buckets.capacity
        self._pending: Optional[T] = self._buckets.chain(self._slot)[0] if self._has_pending else None

    def has_next(self) -> bool:
        """Check if another element is available."""
        return self._has_pending

    def next(self) -> T:
        """
        Return the next element.

        Raises:
            ConcurrentModificationError: If the set changed since this
                iterator was created
            NoSuchElementError: If the iterator is exhausted
        """
        if self._owner._mod_count != self._expected_mod_count:
            raise ConcurrentModificationError(
                "Hash set was modified after this iterator was created")

        if not self._has_pending:
            raise NoSuchElementError()

        value = self._pending
        self._advance()
        return value

    def _advance(self) -> None:
        """Move the cursor to the element after the pending one."""
        chain = self._buckets.chain(self._slot)
        self._pos += 1

        if self._pos >= len(chain):
            self._slot = self._buckets.next_occupied(self._slot + 1)
            self._pos = 0
            if self._slot >= self._buckets.capacity:
                self._has_pending = False
                self._pending = None
                return
            chain = self._buckets.chain(self._slot)

        self._pending = chain[self._pos]

    def __next__(self) -> T:
        return self.next()

    def __iter__(self) -> "HashSetIterator[T]":
        return self
