#!/usr/bin/env python3
"""Performance benchmarks for chainset hash sets."""

import time
import statistics
import sys
import os

import numpy as np
import psutil

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chainset import HashSet, DigestEquivalence


class Benchmark:
    """Base benchmark class with timing and memory helpers."""

    UNITS = ((1e6, "Mops/s"), (1e3, "Kops/s"), (1.0, "ops/s"))

    @classmethod
    def format_throughput(cls, ops_per_sec):
        """Format throughput with the largest unit that fits."""
        for scale, unit in cls.UNITS:
            if ops_per_sec >= scale:
                return f"{ops_per_sec / scale:.2f} {unit}"
        return f"{ops_per_sec:.2f} ops/s"

    @staticmethod
    def measure_latency(func, iterations=10000):
        """Per-call latency in nanoseconds: mean, median and 99th percentile."""
        latencies = []
        for _ in range(iterations):
            start = time.perf_counter_ns()
            func()
            latencies.append(time.perf_counter_ns() - start)

        latencies.sort()
        return {
            "avg": statistics.mean(latencies),
            "p50": latencies[len(latencies) // 2],
            "p99": latencies[int(len(latencies) * 0.99)],
        }

    @staticmethod
    def rss_mb():
        """Resident set size of this process in MB."""
        return psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)


class SetBenchmark(Benchmark):
    """HashSet performance benchmarks."""

    def benchmark_insert_throughput(self):
        """Insert throughput for several load factors."""
        print("\n=== HashSet Insert Throughput ===")

        iterations = 200000
        for load_factor in (0.5, 0.75, 2.0, 8.0):
            s = HashSet(16, load_factor)

            start = time.perf_counter()
            for i in range(iterations):
                s.add(i)
            end = time.perf_counter()

            throughput = iterations / (end - start)
            longest = max(s.bucket_lengths())
            print(f"load={load_factor:<5} {self.format_throughput(throughput):>12}, "
                  f"capacity={s.capacity}, longest chain={longest}")

    def benchmark_latency(self):
        """Lookup latency for hits and misses."""
        print("\n=== HashSet Lookup Latency (nanoseconds) ===")

        s = HashSet()
        for i in range(100000):
            s.add(i)

        for label, element in (("hit", 4242), ("miss", -1)):
            stats = self.measure_latency(lambda: s.contains(element))
            print(f"{label:5} avg={stats['avg']:.0f}, p50={stats['p50']:.0f}, "
                  f"p99={stats['p99']:.0f}")

    def benchmark_equivalences(self):
        """Natural hashing against SHA-256 digests."""
        print("\n=== HashSet Equivalence Cost ===")

        iterations = 50000
        for label, kwargs in (("natural", {}),
                              ("digest", {"dtype": np.int64,
                                          "equivalence": DigestEquivalence(np.int64)})):
            s = HashSet(**kwargs)
            start = time.perf_counter()
            for i in range(iterations):
                s.add(i)
            end = time.perf_counter()
            print(f"{label:8} {self.format_throughput(iterations / (end - start)):>12}")

    def benchmark_memory(self):
        """Resident memory growth while filling a set."""
        print("\n=== HashSet Memory ===")

        before = self.rss_mb()
        s = HashSet()
        for i in range(1000000):
            s.add(i)
        after = self.rss_mb()

        print(f"1M ints: +{after - before:.1f} MB RSS, capacity={s.capacity}")


def main():
    """Run all benchmarks."""
    print("=== chainset Performance Benchmarks ===")
    print(f"NumPy version: {np.__version__}")

    bench = SetBenchmark()
    bench.benchmark_insert_throughput()
    bench.benchmark_latency()
    bench.benchmark_equivalences()
    bench.benchmark_memory()

    print("\nAll benchmarks completed")


if __name__ == "__main__":
    main()
