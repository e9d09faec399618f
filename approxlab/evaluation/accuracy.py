"""
Accuracy evaluation of approximation variants.

Samples a uniform grid, compares every variant against a reference
implementation and reports absolute and relative error statistics.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from approxlab.errors import ConfigurationError
from approxlab.family import ApproximationVariant, ReferenceImplementation

logger = logging.getLogger(__name__)

# Reference values at or below this magnitude are skipped for relative error
RELATIVE_ERROR_THRESHOLD = 1e-10


@dataclass(frozen=True)
class WorstCase:
    """Reference and approximation re-evaluated at a worst-case input."""
    kind: str  # 'absolute' | 'relative'
    x: float
    reference_value: float
    approximation_value: float


@dataclass(frozen=True)
class ErrorStatistics:
    """
    Error statistics of one variant over one sampling run.

    ``max_rel_error`` is a fraction, not a percentage.
    """
    variant: str
    avg_abs_error: float
    max_abs_error: float
    max_abs_error_input: float
    max_rel_error: float
    max_rel_error_input: float
    worst_cases: Tuple[WorstCase, ...] = ()


@dataclass(frozen=True)
class AccuracyReport:
    """Result of an accuracy run, one ErrorStatistics per variant in order."""
    family: str
    reference: str
    start: float
    end: float
    points: int
    step: float
    results: Tuple[ErrorStatistics, ...]

    def get(self, variant: str) -> Optional[ErrorStatistics]:
        for stats in self.results:
            if stats.variant == variant:
                return stats
        return None


def sample_grid(start: float, end: float, point_count: int) -> Tuple[List[float], float]:
    """
    Build the half-open sampling grid x_i = start + i*step, i in [0, N).

    Args:
        start: Range start
        end: Range end
        point_count: Number of samples N

    Returns:
        Tuple of (samples, step)
    """
    step = (end - start) / point_count
    xs = start + np.arange(point_count, dtype=np.float64) * step
    return xs.tolist(), step


class AccuracyEvaluator:
    """
    Accuracy evaluator for approximation variants.

    The evaluator is created for one run and discarded afterwards. All inputs
    are checked in ``__init__``, so a ConfigurationError is raised before any
    function is sampled.

    Attributes:
        reference: Reference implementation
        variants: Variants to evaluate, in order
        start: Range start
        end: Range end
        point_count: Number of samples
        report_worst: Whether to re-evaluate worst-case inputs

    Examples:
        >>> family = sine_family()
        >>> evaluator = AccuracyEvaluator(family.reference('sin'), family.variants(),
        ...                               -math.pi, math.pi, 1000)
        >>> report = evaluator.evaluate()
        >>> report.results[0].max_abs_error
    """

    def __init__(
        self,
        reference: Optional[ReferenceImplementation],
        variants: Iterable[ApproximationVariant],
        start: float,
        end: float,
        point_count: int,
        report_worst: bool = False,
        family_name: str = ""
    ):
        """
        Initialize accuracy evaluator.

        Args:
            reference: Reference implementation (name and function)
            variants: Approximation variants to compare
            start: Range start
            end: Range end (excluded from the samples)
            point_count: Number of samples, must be positive
            report_worst: Re-evaluate both worst-case inputs for inspection
            family_name: Family name carried into the report
        """
        variants = list(variants) if variants is not None else []

        if reference is None:
            raise ConfigurationError("Reference function not set")
        if not variants:
            raise ConfigurationError("No approximation methods registered")
        if isinstance(point_count, bool) or not isinstance(point_count, int) or point_count <= 0:
            raise ConfigurationError(f"Point count must be a positive integer, got {point_count!r}")

        self.reference = reference
        self.variants = variants
        self.start = float(start)
        self.end = float(end)
        self.point_count = point_count
        self.report_worst = report_worst
        self.family_name = family_name

    def evaluate(self) -> AccuracyReport:
        """
        Sample every variant and compute its error statistics.

        Returns:
            AccuracyReport with one entry per variant
        """
        xs, step = sample_grid(self.start, self.end, self.point_count)
        logger.info(
            f"Accuracy run: {len(self.variants)} variant(s) against {self.reference.name} "
            f"on [{self.start}, {self.end}) with {self.point_count} points"
        )

        reference_fn = self.reference.fn
        reference_values = [reference_fn(x) for x in xs]

        results = []
        for variant in self.variants:
            stats = self._evaluate_variant(variant, xs, reference_values)
            logger.debug(
                f"{variant.name}: avg={stats.avg_abs_error:.3e} "
                f"max={stats.max_abs_error:.3e} rel={stats.max_rel_error:.3e}"
            )
            results.append(stats)

        return AccuracyReport(
            family=self.family_name,
            reference=self.reference.name,
            start=self.start,
            end=self.end,
            points=self.point_count,
            step=step,
            results=tuple(results)
        )

    def _evaluate_variant(
        self,
        variant: ApproximationVariant,
        xs: List[float],
        reference_values: List[float]
    ) -> ErrorStatistics:
        """Compute error statistics for one variant."""
        approx_fn = variant.fn

        total_error = 0.0
        max_error = 0.0
        max_error_input = 0.0
        max_relative_error = 0.0
        max_relative_error_input = 0.0

        for x, reference_value in zip(xs, reference_values):
            abs_error = abs(reference_value - approx_fn(x))
            total_error += abs_error

            if abs_error > max_error:
                max_error = abs_error
                max_error_input = x

            magnitude = abs(reference_value)
            if magnitude > RELATIVE_ERROR_THRESHOLD:
                relative_error = abs_error / magnitude
                if relative_error > max_relative_error:
                    max_relative_error = relative_error
                    max_relative_error_input = x

        worst_cases: Tuple[WorstCase, ...] = ()
        if self.report_worst:
            worst_cases = (
                self._worst_case('absolute', max_error_input, approx_fn),
                self._worst_case('relative', max_relative_error_input, approx_fn),
            )

        return ErrorStatistics(
            variant=variant.name,
            avg_abs_error=total_error / self.point_count,
            max_abs_error=max_error,
            max_abs_error_input=max_error_input,
            max_rel_error=max_relative_error,
            max_rel_error_input=max_relative_error_input,
            worst_cases=worst_cases
        )

    def _worst_case(self, kind: str, x: float, approx_fn) -> WorstCase:
        return WorstCase(
            kind=kind,
            x=x,
            reference_value=self.reference.fn(x),
            approximation_value=approx_fn(x)
        )


def evaluate_accuracy(
    reference: Optional[ReferenceImplementation],
    variants: Iterable[ApproximationVariant],
    start: float,
    end: float,
    point_count: int,
    report_worst: bool = False,
    family_name: str = ""
) -> AccuracyReport:
    """
    Convenience function for accuracy evaluation.

    Args:
        reference: Reference implementation
        variants: Approximation variants
        start: Range start
        end: Range end
        point_count: Number of samples
        report_worst: Re-evaluate worst-case inputs
        family_name: Family name carried into the report

    Returns:
        AccuracyReport

    Raises:
        ConfigurationError: If the reference is missing, no variants are
            given or point_count is not positive
    """
    evaluator = AccuracyEvaluator(
        reference, variants, start, end, point_count,
        report_worst=report_worst, family_name=family_name
    )
    return evaluator.evaluate()
