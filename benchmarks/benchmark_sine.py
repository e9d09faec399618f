"""
Benchmark the sine approximations against math.sin.

Times each implementation on a fixed input pool at several pool sizes and
reports nanoseconds per call next to the speedup factor.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math

from approxlab.evaluation.performance import generate_sample_pool, time_calls
from approxlab.functions import sine_family


def benchmark_pool(pool_size=1000, iterations=500000, low=0.0, high=10.0):
    """Benchmark every variant on one pool."""
    print(f"\nBenchmarking pool_size={pool_size}, range=[{low}, {high}) ({iterations} calls)...")

    family = sine_family()
    pool = generate_sample_pool(pool_size, low, high, seed=42)

    # Warmup
    for variant in family.variants():
        time_calls(variant.fn, pool, 1000)

    reference_ns, _ = time_calls(math.sin, pool, iterations)
    print(f"  {'math.sin':<42} {reference_ns / iterations:8.1f} ns/call")

    results = {}
    for variant in family.variants():
        elapsed, _ = time_calls(variant.fn, pool, iterations)
        elapsed = max(elapsed, 1)
        results[variant.name] = reference_ns / elapsed
        print(f"  {variant.name:<42} {elapsed / iterations:8.1f} ns/call  "
              f"speedup {reference_ns / elapsed:.3f}x")

    return results


def main():
    """Run all benchmarks."""
    print("=" * 60)
    print("Sine Approximation Benchmarks")
    print("=" * 60)

    benchmark_pool(pool_size=1000)
    benchmark_pool(pool_size=10, iterations=500000)
    # Inputs already inside [-pi, pi] skip most of the range reduction work
    benchmark_pool(pool_size=1000, low=-math.pi, high=math.pi)

    print("\n" + "=" * 60)
    print("Benchmarks complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
