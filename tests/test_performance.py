"""
Tests for performance evaluation.
"""

import math

import pytest

from approxlab.errors import ConfigurationError
from approxlab.evaluation import PerformanceEvaluator, evaluate_performance
from approxlab.evaluation.performance import generate_sample_pool, time_calls
from approxlab.family import ApproximationVariant, ReferenceImplementation


def test_sample_pool_bounds_and_size():
    pool = generate_sample_pool(500, 0.0, 10.0, seed=7)

    assert len(pool) == 500
    assert all(0.0 <= x < 10.0 for x in pool)
    assert all(isinstance(x, float) for x in pool)


def test_sample_pool_is_reproducible_with_seed():
    assert generate_sample_pool(100, seed=3) == generate_sample_pool(100, seed=3)
    assert generate_sample_pool(100, seed=3) != generate_sample_pool(100, seed=4)


def test_time_calls_cycles_through_pool():
    pool = [1.0, 2.0, 3.0]
    elapsed, total = time_calls(lambda x: x, pool, 7)

    # 1 + 2 + 3 + 1 + 2 + 3 + 1
    assert total == 13.0
    assert elapsed >= 0


def test_sine_family_run(family, sin_reference):
    report = evaluate_performance(
        sin_reference, family.variants(), 100000, seed=42, family_name=family.name
    )

    assert report.family == "Sin Approximations"
    assert report.reference == "sin"
    assert report.iterations == 100000
    assert [r.variant for r in report.results] == family.variant_names()
    for result in report.results:
        assert result.duration_ns > 0
        assert result.speedup_factor > 0
        assert math.isfinite(result.accumulated_sum)


def test_accumulated_sums_match_sequential_sum(family, sin_reference):
    pool = generate_sample_pool(1000, 0.0, 10.0, seed=11)
    iterations = 2500

    report = evaluate_performance(sin_reference, family.variants(), iterations, seed=11)

    expected = 0.0
    for i in range(iterations):
        expected += math.sin(pool[i % len(pool)])
    assert report.reference_sum == expected

    for variant in family.variants():
        expected = 0.0
        for i in range(iterations):
            expected += variant(pool[i % len(pool)])
        assert report.get(variant.name).accumulated_sum == expected


def test_speedup_is_reference_over_variant_duration(family, sin_reference):
    report = evaluate_performance(sin_reference, family.variants(), 20000, seed=1)

    for result in report.results:
        expected = max(report.reference_duration_ns, 1) / result.duration_ns
        assert result.speedup_factor == pytest.approx(expected)
        assert result.duration_ms == result.duration_ns / 1e6


def test_timing_windows_are_not_interleaved():
    """The reference runs to completion before the first variant starts."""
    calls = []

    def recorder(name):
        def fn(x):
            calls.append(name)
            return x
        return fn

    reference = ReferenceImplementation("ref", recorder("ref"))
    variants = [
        ApproximationVariant("a", recorder("a")),
        ApproximationVariant("b", recorder("b")),
    ]

    evaluate_performance(reference, variants, 50, pool_size=10, seed=0)

    assert calls == ["ref"] * 50 + ["a"] * 50 + ["b"] * 50


def test_empty_variants_is_configuration_error(counting_reference):
    reference, counter = counting_reference

    with pytest.raises(ConfigurationError):
        evaluate_performance(reference, [], 1000)
    assert counter.calls == 0


def test_missing_reference_is_configuration_error(identity_variant):
    with pytest.raises(ConfigurationError):
        evaluate_performance(None, [identity_variant], 1000)


@pytest.mark.parametrize("iterations", [0, -1, True])
def test_invalid_iterations_is_configuration_error(iterations, counting_reference, identity_variant):
    reference, counter = counting_reference

    with pytest.raises(ConfigurationError):
        PerformanceEvaluator(reference, [identity_variant], iterations)
    assert counter.calls == 0


def test_invalid_pool_size_is_configuration_error(sin_reference, identity_variant):
    with pytest.raises(ConfigurationError):
        PerformanceEvaluator(sin_reference, [identity_variant], 10, pool_size=0)


def test_evaluator_draws_pool_once(sin_reference, identity_variant):
    evaluator = PerformanceEvaluator(sin_reference, [identity_variant], 10, pool_size=25, low=-1.0, high=1.0, seed=5)

    assert len(evaluator.pool) == 25
    assert all(-1.0 <= x < 1.0 for x in evaluator.pool)
    assert evaluator.pool == generate_sample_pool(25, -1.0, 1.0, seed=5)
