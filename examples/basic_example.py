#!/usr/bin/env python3
"""Basic example of using chainset hash sets."""

import numpy as np
from chainset import (
    HashSet,
    DigestEquivalence,
    ConcurrentModificationError,
    setup_logging,
)


def main():
    setup_logging("DEBUG")
    print("=== chainset Example ===\n")

    # Example 1: Strings
    print("1. String set:")
    words = HashSet(16, 0.75)
    for word in ("Poe", "E.", "Near a raven", "Poe"):
        added = words.add(word)
        print(f"   add({word!r}) -> {added}")
    print(f"   {words}")

    words.remove("Poe")
    print(f"   After remove('Poe'): size={words.size()}, 'Poe' in set: {'Poe' in words}")

    # Example 2: Growth
    print("\n2. Growth past the load factor:")
    numbers = HashSet(4, 0.75)
    for i in range(40):
        numbers.add(i)
    print(f"   40 elements -> capacity {numbers.capacity}")
    print(f"   Chain lengths: {numbers.bucket_lengths()}")

    # Example 3: Typed set exported to numpy
    print("\n3. Typed set:")
    ids = HashSet(dtype=np.int64, equivalence=DigestEquivalence(np.int64))
    ids.add_all([1001, 1002, 1003, 1002])
    print(f"   to_array() -> {np.sort(ids.to_array())}")

    # Example 4: Fail-fast iteration
    print("\n4. Fail-fast iteration:")
    it = words.iterator()
    words.add("Lenore")
    try:
        it.next()
    except ConcurrentModificationError as e:
        print(f"   {type(e).__name__}: {e}")

    print("\n=== Example Complete ===")


if __name__ == "__main__":
    main()
