"""
approxlab - Accuracy and throughput testing for numeric approximations

Compares approximation algorithms of a mathematical function with a trusted
reference implementation:
- Function families holding reference implementations and variants
- Accuracy evaluation (average/maximum absolute and relative error)
- Performance evaluation over a shared random input pool
- Bundled sine approximations (single-precision piecewise, CORDIC, polynomial)
"""

__version__ = "0.1.0"

from approxlab.errors import ConfigurationError
from approxlab.family import (
    ApproximationVariant,
    FunctionFamily,
    ReferenceImplementation,
    build_family
)
from approxlab.registry import FamilyRegistry, build_registry, default_registry
from approxlab.functions import sine_family
from approxlab.evaluation import (
    AccuracyEvaluator,
    AccuracyReport,
    ErrorStatistics,
    PerformanceEvaluator,
    PerformanceReport,
    PerformanceResult,
    evaluate_accuracy,
    evaluate_performance,
    sample_series,
    sample_error_series
)

__all__ = [
    'ConfigurationError',
    'ApproximationVariant',
    'FunctionFamily',
    'ReferenceImplementation',
    'build_family',
    'FamilyRegistry',
    'build_registry',
    'default_registry',
    'sine_family',
    'AccuracyEvaluator',
    'AccuracyReport',
    'ErrorStatistics',
    'PerformanceEvaluator',
    'PerformanceReport',
    'PerformanceResult',
    'evaluate_accuracy',
    'evaluate_performance',
    'sample_series',
    'sample_error_series'
]
