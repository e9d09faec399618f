"""
Plot data for reference and approximation curves.

Produces sampled (x, y) series for a plotting front end. Unlike the accuracy
grid, the series grid includes both ends of the range.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from approxlab.errors import ConfigurationError
from approxlab.family import ApproximationVariant, ReferenceImplementation

DEFAULT_SERIES_POINTS = 1000


@dataclass(frozen=True)
class Series:
    """One named curve."""
    name: str
    x: np.ndarray
    y: np.ndarray


@dataclass(frozen=True)
class SeriesSet:
    """Reference curve plus one curve per variant."""
    reference: Series
    variants: Tuple[Series, ...]


def _check_inputs(reference, variants, points) -> List[ApproximationVariant]:
    variants = list(variants) if variants is not None else []
    if reference is None:
        raise ConfigurationError("Reference function not set")
    if not variants:
        raise ConfigurationError("No approximation methods registered")
    if isinstance(points, bool) or not isinstance(points, int) or points < 2:
        raise ConfigurationError(f"Series need at least 2 points, got {points!r}")
    return variants


def series_grid(start: float, end: float, points: int) -> np.ndarray:
    """Inclusive grid x_i = start + i*step with step = (end - start)/(points - 1)."""
    step = (end - start) / (points - 1)
    return start + np.arange(points, dtype=np.float64) * step


def _sample(fn, xs: np.ndarray) -> np.ndarray:
    return np.array([fn(x) for x in xs.tolist()], dtype=np.float64)


def sample_series(
    reference: Optional[ReferenceImplementation],
    variants: Iterable[ApproximationVariant],
    start: float,
    end: float,
    points: int = DEFAULT_SERIES_POINTS
) -> SeriesSet:
    """
    Sample the reference and every variant over [start, end].

    Args:
        reference: Reference implementation
        variants: Approximation variants
        start: Range start
        end: Range end (included)
        points: Number of samples, at least 2

    Returns:
        SeriesSet
    """
    variants = _check_inputs(reference, variants, points)
    xs = series_grid(start, end, points)

    reference_series = Series(reference.name, xs, _sample(reference.fn, xs))
    variant_series = tuple(
        Series(variant.name, xs, _sample(variant.fn, xs)) for variant in variants
    )
    return SeriesSet(reference=reference_series, variants=variant_series)


def sample_error_series(
    reference: Optional[ReferenceImplementation],
    variants: Iterable[ApproximationVariant],
    start: float,
    end: float,
    points: int = DEFAULT_SERIES_POINTS
) -> List[Series]:
    """
    Sample |approx(x) - ref(x)| for every variant over [start, end].

    Returns:
        One Series per variant, named after the variant
    """
    variants = _check_inputs(reference, variants, points)
    xs = series_grid(start, end, points)
    reference_values = _sample(reference.fn, xs)

    return [
        Series(variant.name, xs, np.abs(_sample(variant.fn, xs) - reference_values))
        for variant in variants
    ]
