"""
Throughput benchmarking of approximation variants.

Every implementation is timed over the same pool of random inputs. Timing
windows run one after another and contain nothing but calls to the measured
function and the running sum of its results.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from approxlab.errors import ConfigurationError
from approxlab.family import ApproximationVariant, ReferenceImplementation

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 1000
DEFAULT_POOL_LOW = 0.0
DEFAULT_POOL_HIGH = 10.0


@dataclass(frozen=True)
class PerformanceResult:
    """
    Timing of one variant.

    ``accumulated_sum`` is the sum of every result computed in the timed
    window. A speedup factor below 1 means the variant is slower than the
    reference.
    """
    variant: str
    duration_ns: int
    speedup_factor: float
    accumulated_sum: float

    @property
    def duration_ms(self) -> float:
        return self.duration_ns / 1_000_000.0


@dataclass(frozen=True)
class PerformanceReport:
    """Result of a performance run."""
    family: str
    reference: str
    iterations: int
    reference_duration_ns: int
    reference_sum: float
    results: Tuple[PerformanceResult, ...]

    @property
    def reference_duration_ms(self) -> float:
        return self.reference_duration_ns / 1_000_000.0

    def get(self, variant: str) -> Optional[PerformanceResult]:
        for result in self.results:
            if result.variant == variant:
                return result
        return None


def generate_sample_pool(
    size: int = DEFAULT_POOL_SIZE,
    low: float = DEFAULT_POOL_LOW,
    high: float = DEFAULT_POOL_HIGH,
    seed: Optional[int] = None
) -> List[float]:
    """
    Draw the benchmark inputs uniformly from [low, high).

    Args:
        size: Number of inputs
        low: Lower bound (inclusive)
        high: Upper bound (exclusive)
        seed: Optional seed for a reproducible pool

    Returns:
        List of Python floats
    """
    rng = np.random.default_rng(seed)
    return rng.uniform(low, high, size).tolist()


def time_calls(fn: Callable[[float], float], pool: List[float], iterations: int) -> Tuple[int, float]:
    """
    Time ``iterations`` sequential calls of fn, cycling through pool.

    Returns:
        Tuple of (elapsed nanoseconds, sum of results)
    """
    pool_size = len(pool)
    total = 0.0
    start = time.perf_counter_ns()
    for i in range(iterations):
        total += fn(pool[i % pool_size])
    elapsed = time.perf_counter_ns() - start
    return elapsed, total


class PerformanceEvaluator:
    """
    Performance evaluator comparing variants with a reference.

    Attributes:
        reference: Reference implementation
        variants: Variants to time, in order
        iterations: Calls per implementation
        pool: Shared benchmark inputs, drawn once per evaluator

    Examples:
        >>> family = sine_family()
        >>> evaluator = PerformanceEvaluator(family.reference('sin'), family.variants(), 100000)
        >>> report = evaluator.evaluate()
        >>> [r.speedup_factor for r in report.results]
    """

    def __init__(
        self,
        reference: Optional[ReferenceImplementation],
        variants: Iterable[ApproximationVariant],
        iterations: int,
        pool_size: int = DEFAULT_POOL_SIZE,
        low: float = DEFAULT_POOL_LOW,
        high: float = DEFAULT_POOL_HIGH,
        seed: Optional[int] = None,
        family_name: str = ""
    ):
        """
        Initialize performance evaluator.

        Args:
            reference: Reference implementation
            variants: Approximation variants
            iterations: Calls per implementation, must be positive
            pool_size: Number of random benchmark inputs
            low: Lower bound of the inputs
            high: Upper bound of the inputs
            seed: Optional seed for the input pool
            family_name: Family name carried into the report
        """
        variants = list(variants) if variants is not None else []

        if reference is None:
            raise ConfigurationError("Reference function not set")
        if not variants:
            raise ConfigurationError("No approximation methods registered")
        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
            raise ConfigurationError(f"Iterations must be a positive integer, got {iterations!r}")
        if isinstance(pool_size, bool) or not isinstance(pool_size, int) or pool_size <= 0:
            raise ConfigurationError(f"Pool size must be a positive integer, got {pool_size!r}")

        self.reference = reference
        self.variants = variants
        self.iterations = iterations
        self.family_name = family_name
        self.pool = generate_sample_pool(pool_size, low, high, seed)

    def evaluate(self) -> PerformanceReport:
        """
        Time the reference, then each variant in turn.

        Returns:
            PerformanceReport
        """
        logger.info(
            f"Performance run: {len(self.variants)} variant(s) against {self.reference.name}, "
            f"{self.iterations} iterations over {len(self.pool)} inputs"
        )

        reference_ns, reference_sum = time_calls(self.reference.fn, self.pool, self.iterations)
        logger.debug(f"{self.reference.name}: {reference_ns / 1e6:.3f} ms")

        timings = []
        for variant in self.variants:
            elapsed, total = time_calls(variant.fn, self.pool, self.iterations)
            timings.append((variant.name, elapsed, total))
            logger.debug(f"{variant.name}: {elapsed / 1e6:.3f} ms")

        results = []
        for name, elapsed, total in timings:
            # perf_counter_ns can report 0 for very short windows on coarse clocks
            elapsed = max(elapsed, 1)
            results.append(PerformanceResult(
                variant=name,
                duration_ns=elapsed,
                speedup_factor=max(reference_ns, 1) / elapsed,
                accumulated_sum=total
            ))

        return PerformanceReport(
            family=self.family_name,
            reference=self.reference.name,
            iterations=self.iterations,
            reference_duration_ns=reference_ns,
            reference_sum=reference_sum,
            results=tuple(results)
        )


def evaluate_performance(
    reference: Optional[ReferenceImplementation],
    variants: Iterable[ApproximationVariant],
    iterations: int,
    pool_size: int = DEFAULT_POOL_SIZE,
    low: float = DEFAULT_POOL_LOW,
    high: float = DEFAULT_POOL_HIGH,
    seed: Optional[int] = None,
    family_name: str = ""
) -> PerformanceReport:
    """
    Convenience function for performance evaluation.

    Raises:
        ConfigurationError: If the reference is missing, no variants are
            given or iterations is not positive
    """
    evaluator = PerformanceEvaluator(
        reference, variants, iterations,
        pool_size=pool_size, low=low, high=high, seed=seed,
        family_name=family_name
    )
    return evaluator.evaluate()
