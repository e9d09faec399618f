"""
Accuracy and performance evaluation of approximation variants.
"""

from approxlab.evaluation.accuracy import (
    AccuracyEvaluator,
    AccuracyReport,
    ErrorStatistics,
    WorstCase,
    evaluate_accuracy
)
from approxlab.evaluation.performance import (
    PerformanceEvaluator,
    PerformanceReport,
    PerformanceResult,
    evaluate_performance
)
from approxlab.evaluation.series import (
    Series,
    SeriesSet,
    sample_series,
    sample_error_series
)

__all__ = [
    'AccuracyEvaluator',
    'AccuracyReport',
    'ErrorStatistics',
    'WorstCase',
    'evaluate_accuracy',
    'PerformanceEvaluator',
    'PerformanceReport',
    'PerformanceResult',
    'evaluate_performance',
    'Series',
    'SeriesSet',
    'sample_series',
    'sample_error_series'
]
