"""
Test suite for HashSet core operations.
"""

import math
import random

import numpy as np
import pytest

from chainset import (
    HashSet,
    Equivalence,
    InvalidArgumentError,
    IncompatibleTypeError,
)


class TestSetConstruction:
    """Constructor defaults and argument validation."""

    def test_defaults(self):
        """Default construction uses capacity 16 and load factor 0.75."""
        s = HashSet()
        assert s.capacity == 16
        assert s.load_factor == 0.75
        assert s.dtype == np.dtype(object)
        assert s.size() == 0
        assert s.is_empty()

    def test_capacity_only(self):
        """Capacity override keeps the default load factor."""
        s = HashSet(64)
        assert s.capacity == 64
        assert s.load_factor == 0.75

    def test_capacity_and_load_factor(self):
        s = HashSet(8, 2.5)
        assert s.capacity == 8
        assert s.load_factor == 2.5

    @pytest.mark.parametrize("load_factor", [0, -0.5, -10, math.nan])
    def test_rejects_non_positive_load_factor(self, load_factor):
        with pytest.raises(InvalidArgumentError):
            HashSet(16, load_factor)

    def test_rejects_negative_capacity(self):
        with pytest.raises(InvalidArgumentError):
            HashSet(-1)

    def test_invalid_argument_is_value_error(self):
        """InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            HashSet(16, 0)

    def test_rejects_non_integer_capacity(self):
        with pytest.raises(TypeError):
            HashSet("16")
        with pytest.raises(TypeError):
            HashSet(1.5)

    def test_zero_capacity(self):
        """Zero capacity allocates one slot and still works."""
        s = HashSet(0)
        assert s.capacity == 1
        assert s.add("a")
        assert s.add("b")
        assert s.contains("a") and s.contains("b")

    def test_of(self):
        """HashSet.of() collects distinct elements and forwards kwargs."""
        s = HashSet.of(["a", "b", "a", "c"], capacity=4)
        assert s.size() == 3
        assert s.capacity == 4
        assert s.contains_all(["a", "b", "c"])


class TestSetBasic:
    """Basic add / contains / remove behaviour."""

    def test_poe_scenario(self, poe_set):
        """Three inserts, then removal of one."""
        assert poe_set.size() == 3

        assert poe_set.remove("Poe") is True
        assert poe_set.size() == 2
        assert poe_set.contains("Poe") is False

    def test_contains(self, poe_set):
        assert poe_set.contains("Poe")
        assert poe_set.contains("E.")
        assert not poe_set.contains("Midnights so dreary")

    def test_duplicate_add(self):
        """Second add of the same element is rejected and changes nothing."""
        s = HashSet()
        assert s.add("raven") is True
        mod_count = s.mod_count

        assert s.add("raven") is False
        assert s.size() == 1
        assert s.mod_count == mod_count

    def test_remove_missing(self, poe_set):
        """Removing an absent element is a no-op."""
        mod_count = poe_set.mod_count
        assert poe_set.remove("Lenore") is False
        assert poe_set.size() == 3
        assert poe_set.mod_count == mod_count

    def test_remove_from_empty_slot(self):
        s = HashSet()
        assert s.remove("anything") is False
        assert s.size() == 0

    def test_aliases(self):
        """insert/erase/discard/empty mirror add/remove/is_empty."""
        s = HashSet()
        assert s.insert(10)
        assert s.contains(10)
        assert not s.empty()

        assert s.erase(10)
        assert s.empty()

        s.insert(20)
        s.discard(20)
        s.discard(20)  # no error when already gone
        assert s.size() == 0

    def test_clear(self, poe_set):
        """clear() empties the set and bumps mod_count once."""
        mod_count = poe_set.mod_count
        poe_set.clear()

        assert poe_set.is_empty()
        assert poe_set.size() == 0
        assert poe_set.mod_count == mod_count + 1
        assert not poe_set.contains("Poe")

    def test_clear_resets_capacity(self):
        s = HashSet(4)
        for i in range(20):
            s.add(i)
        assert s.capacity > 4

        s.clear()
        assert s.capacity == 16

    def test_mod_count_ignores_reads(self, poe_set):
        mod_count = poe_set.mod_count
        poe_set.contains("Poe")
        poe_set.size()
        poe_set.to_list()
        poe_set.contains_all(["Poe"])
        assert poe_set.mod_count == mod_count

    def test_mod_count_per_mutation(self):
        s = HashSet()
        s.add("a")
        s.add("b")
        s.remove("a")
        assert s.mod_count == 3


class TestSetNone:
    """Handling of the None sentinel."""

    def test_add_none(self):
        s = HashSet()
        assert not s.contains(None)

        assert s.add(None) is True
        assert s.contains(None)

        assert s.add(None) is False
        assert s.size() == 1

    def test_remove_none(self, poe_set):
        poe_set.add(None)
        assert poe_set.size() == 4
        assert poe_set.remove(None) is True
        assert not poe_set.contains(None)
        assert poe_set.size() == 3

    def test_none_lives_in_slot_zero(self):
        s = HashSet()
        s.add(None)
        assert s.bucket_lengths()[0] == 1

    def test_none_shares_slot_with_zero_hash(self):
        """None and an element hashing to 0 coexist in slot 0."""
        s = HashSet(equivalence=Equivalence(lambda e: 0))
        assert s.add(None)
        assert s.add("x")
        assert s.bucket_lengths()[0] == 2
        assert s.contains(None)
        assert s.contains("x")

        assert s.remove("x")
        assert s.contains(None)

    def test_none_not_permitted(self):
        s = HashSet(permits_none=False)
        with pytest.raises(IncompatibleTypeError):
            s.add(None)
        assert s.size() == 0
        assert None not in s


class TestSetTypes:
    """dtype-based element compatibility."""

    def test_typed_set_accepts_matching(self):
        s = HashSet(dtype=np.int32)
        assert s.add(1)
        assert s.add(np.int64(2))
        assert s.add(np.uint8(7))
        assert s.size() == 3

    def test_typed_set_rejects_other_kinds(self):
        s = HashSet(dtype=np.int32)
        with pytest.raises(IncompatibleTypeError):
            s.add("x")
        with pytest.raises(IncompatibleTypeError):
            s.add(3.5)
        with pytest.raises(IncompatibleTypeError):
            s.add([1, 2])
        assert s.size() == 0
        assert s.mod_count == 0

    def test_incompatible_is_type_error(self):
        s = HashSet(dtype=np.float64)
        with pytest.raises(TypeError):
            s.contains("1.0")
        with pytest.raises(TypeError):
            s.remove("1.0")

    def test_in_operator_swallows_incompatible(self):
        s = HashSet(dtype=np.int32)
        s.add(5)
        assert "x" not in s
        assert 5 in s

    def test_string_dtype(self):
        s = HashSet(dtype="U16")
        assert s.add("Poe")
        with pytest.raises(IncompatibleTypeError):
            s.add(["Poe"])
        assert s.to_array().dtype == np.dtype("U16")

    def test_object_dtype_accepts_anything(self):
        s = HashSet()
        for element in ("a", 1, 2.5, (1, 2), frozenset({3})):
            assert s.add(element)
        assert s.size() == 5


class TestSetMagicMethods:
    """Test Python magic methods and operator support."""

    def test_len(self, poe_set):
        assert len(poe_set) == 3
        assert len(HashSet()) == 0

    def test_contains_operator(self, poe_set):
        assert "Poe" in poe_set
        assert "Lenore" not in poe_set

    def test_bool(self, poe_set):
        assert poe_set
        assert not HashSet()

    def test_eq(self, poe_set):
        other = HashSet.of(["Near a raven", "Poe", "E."], capacity=2)
        assert poe_set == other
        other.remove("Poe")
        assert poe_set != other
        assert poe_set != {"Poe", "E.", "Near a raven"}

    def test_unhashable(self, poe_set):
        with pytest.raises(TypeError):
            hash(poe_set)

    def test_repr(self, poe_set):
        text = repr(poe_set)
        assert text == "HashSet(size=3, capacity=16, load_factor=0.75, dtype=object)"
        assert str(poe_set) == text


class TestSetModel:
    """Random add/remove sequences checked against the built-in set."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_matches_builtin_set(self, seed):
        rng = random.Random(seed)
        s = HashSet(2, 0.75)
        model = set()

        for _ in range(500):
            element = rng.randrange(60)
            if rng.random() < 0.6:
                assert s.add(element) == (element not in model)
                model.add(element)
            else:
                assert s.remove(element) == (element in model)
                model.discard(element)

            assert s.size() == len(model)
            assert s.is_empty() == (s.size() == 0)

        assert sorted(s) == sorted(model)
        assert sum(s.bucket_lengths()) == len(model)


class TestSetNaN:
    """Elements that are not equal to themselves."""

    def test_same_nan_added_twice(self):
        nan = float("nan")
        s = HashSet()
        assert s.add(nan) is True
        assert s.add(nan) is False
        assert s.size() == 1
        assert s.contains(nan)

    def test_remove_nan(self):
        nan = float("nan")
        s = HashSet.of([nan, 1.0])
        assert s.remove(nan) is True
        assert s.size() == 1
        assert not s.contains(nan)

    def test_distinct_nan_objects(self):
        """Two separate NaN objects are two members, as in the built-in set."""
        s = HashSet()
        s.add(float("nan"))
        s.add(float("nan"))
        assert s.size() == len({float("nan"), float("nan")})

    def test_nan_in_float_set(self):
        nan = np.float64("nan")
        s = HashSet(dtype=np.float64)
        assert s.add(nan)
        assert not s.add(nan)
        assert s.size() == 1


class TestSetValueRange:
    """Compatibility is judged by value, not only by dtype kind."""

    def test_int32_rejects_out_of_range(self):
        s = HashSet(dtype=np.int32)
        with pytest.raises(IncompatibleTypeError):
            s.add(2**40)
        with pytest.raises(IncompatibleTypeError):
            s.add(-2**31 - 1)
        assert s.size() == 0

    def test_int32_accepts_bounds(self):
        s = HashSet(dtype=np.int32)
        assert s.add(2**31 - 1)
        assert s.add(-2**31)
        assert s.size() == 2

    def test_fixed_width_string_rejects_longer(self):
        s = HashSet(dtype="U2")
        assert s.add("Po")
        with pytest.raises(IncompatibleTypeError):
            s.add("Poe")
        assert s.size() == 1

    def test_unsized_string_accepts_any_length(self):
        s = HashSet(dtype=str)
        assert s.add("Poe")
        assert s.add("Near a raven")
        assert s.size() == 2

    def test_float32_rejects_inexact(self):
        s = HashSet(dtype=np.float32)
        assert s.add(0.5)
        with pytest.raises(IncompatibleTypeError):
            s.add(0.1)
        assert s.add(np.float32(0.1))
