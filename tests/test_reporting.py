"""
Tests for report rendering and export.
"""

import csv
import json
import os

import pytest

from approxlab.evaluation.accuracy import AccuracyReport, ErrorStatistics, WorstCase
from approxlab.evaluation.performance import PerformanceReport, PerformanceResult
from approxlab.reporting import (
    export_report,
    format_decimal,
    format_report,
    report_to_dict,
)


@pytest.fixture
def accuracy_report():
    stats = ErrorStatistics(
        variant="CORDIC sine approximation",
        avg_abs_error=0.0000125,
        max_abs_error=0.00003,
        max_abs_error_input=1.25,
        max_rel_error=0.0004,
        max_rel_error_input=0.01,
        worst_cases=(
            WorstCase('absolute', 1.25, 0.9489846, 0.9489546),
            WorstCase('relative', 0.01, 0.0099998, 0.0099958),
        )
    )
    return AccuracyReport(
        family="Sin Approximations", reference="sin", start=-1.0, end=1.0,
        points=100, step=0.02, results=(stats,)
    )


@pytest.fixture
def performance_report():
    result = PerformanceResult(
        variant="Chebyshev polynomial sine approximation",
        duration_ns=2_500_000, speedup_factor=0.8, accumulated_sum=12.5
    )
    return PerformanceReport(
        family="Sin Approximations", reference="sin", iterations=1000,
        reference_duration_ns=2_000_000, reference_sum=12.25, results=(result,)
    )


@pytest.mark.parametrize("value, expected", [
    (0.25, "0.25"),
    (3.0, "3"),
    (0.0, "0"),
    (-0.0, "0"),
    (1e-12, "0"),
    (0.123456789, "0.12345679"),
    (-2.5, "-2.5"),
])
def test_format_decimal(value, expected):
    assert format_decimal(value) == expected


def test_format_decimal_non_finite():
    assert format_decimal(float('inf')) == "inf"
    assert format_decimal(float('nan')) == "nan"


def test_format_accuracy_report(accuracy_report):
    text = format_report(accuracy_report)

    assert "ACCURACY TEST RESULTS" in text
    assert "Testing: CORDIC sine approximation" in text
    assert "Average absolute error: 0.0000125" in text
    assert "Maximum absolute error: 0.00003" in text
    assert "Maximum relative error: 0.04%" in text
    assert "Worst cases:" in text
    assert "Max abs error at x = 1.25" in text
    assert "Max rel error at x = 0.01" in text


def test_format_accuracy_report_without_worst_cases(accuracy_report):
    stats = accuracy_report.results[0]
    plain = AccuracyReport(
        family=accuracy_report.family, reference=accuracy_report.reference,
        start=-1.0, end=1.0, points=100, step=0.02,
        results=(ErrorStatistics(stats.variant, 0.1, 0.2, 0.3, 0.4, 0.5),)
    )
    assert "Worst cases:" not in format_report(plain)


def test_format_performance_report(performance_report):
    text = format_report(performance_report)

    assert "PERFORMANCE TEST RESULTS" in text
    assert "Reference implementation (sin)" in text
    assert "Time: 2.0 ms" in text
    assert "Time: 2.5 ms" in text
    assert "Speedup factor: 0.8x" in text
    assert "Checksum: 12.5" in text


def test_format_report_rejects_other_types():
    with pytest.raises(TypeError):
        format_report({"results": []})


def test_report_to_dict(accuracy_report, performance_report):
    data = report_to_dict(accuracy_report)
    assert data['kind'] == 'accuracy'
    assert data['results'][0]['variant'] == "CORDIC sine approximation"
    assert data['results'][0]['worst_cases'][0]['kind'] == 'absolute'

    data = report_to_dict(performance_report)
    assert data['kind'] == 'performance'
    assert data['results'][0]['duration_ns'] == 2_500_000


def test_export_json(accuracy_report, tmp_path):
    path = os.path.join(str(tmp_path), "reports", "accuracy.json")
    export_report(accuracy_report, path)

    with open(path) as f:
        data = json.load(f)
    assert data['kind'] == 'accuracy'
    assert data['points'] == 100
    assert data['results'][0]['max_abs_error'] == 0.00003


def test_export_csv(performance_report, tmp_path):
    path = os.path.join(str(tmp_path), "performance.csv")
    export_report(performance_report, path, format='csv')

    with open(path, newline='') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]['variant'] == "Chebyshev polynomial sine approximation"
    assert float(rows[0]['speedup_factor']) == 0.8


def test_export_rejects_unknown_format(accuracy_report, tmp_path):
    with pytest.raises(ValueError):
        export_report(accuracy_report, os.path.join(str(tmp_path), "out.xml"), format='xml')
