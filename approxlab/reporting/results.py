"""
Text rendering and export of evaluation results.
"""

import csv
import json
import math
import os
from dataclasses import asdict
from typing import Any, Dict, List, Union

from approxlab.evaluation.accuracy import AccuracyReport
from approxlab.evaluation.performance import PerformanceReport

Report = Union[AccuracyReport, PerformanceReport]


def format_decimal(value: float, places: int = 8) -> str:
    """
    Format a number with at most ``places`` fractional digits.

    Trailing zeros and a trailing decimal point are dropped, so 0.25 renders
    as "0.25" and 3.0 as "3".
    """
    if not math.isfinite(value):
        return str(value)
    text = f"{value:.{places}f}".rstrip('0').rstrip('.')
    if text in ('-0', ''):
        return '0'
    return text


def format_accuracy_report(report: AccuracyReport) -> str:
    """
    Render an accuracy report as text.

    Args:
        report: Accuracy report

    Returns:
        Formatted report string
    """
    lines = []
    lines.append("========== ACCURACY TEST RESULTS ==========")
    lines.append(f"Function: {report.family}")
    lines.append(f"Reference: {report.reference}")
    lines.append(f"Range: [{report.start}, {report.end}]")
    lines.append(f"Test points: {report.points}")
    lines.append("===========================================")

    for stats in report.results:
        lines.append("")
        lines.append(f"Testing: {stats.variant}")
        lines.append("-------------------------------------")
        lines.append(f"Average absolute error: {format_decimal(stats.avg_abs_error)}")
        lines.append(f"Maximum absolute error: {format_decimal(stats.max_abs_error)}")
        lines.append(f"Maximum relative error: {format_decimal(stats.max_rel_error * 100)}%")

        if stats.worst_cases:
            lines.append("")
            lines.append("Worst cases:")
            for case in stats.worst_cases:
                label = "Max abs error" if case.kind == 'absolute' else "Max rel error"
                lines.append(f"{label} at x = {format_decimal(case.x)}")
                lines.append(f"  Reference: {format_decimal(case.reference_value)}")
                lines.append(f"  Approximation: {format_decimal(case.approximation_value)}")

    return "\n".join(lines)


def format_performance_report(report: PerformanceReport) -> str:
    """
    Render a performance report as text.

    Args:
        report: Performance report

    Returns:
        Formatted report string
    """
    lines = []
    lines.append("========== PERFORMANCE TEST RESULTS ==========")
    lines.append(f"Function: {report.family}")
    lines.append(f"Reference: {report.reference}")
    lines.append(f"Iterations: {report.iterations}")
    lines.append("=============================================")
    lines.append("")
    lines.append(f"Reference implementation ({report.reference})")
    lines.append(f"Time: {report.reference_duration_ms} ms")
    lines.append(f"Checksum: {report.reference_sum}")

    for result in report.results:
        lines.append("")
        lines.append(f"Testing: {result.variant}")
        lines.append("-------------------------------------")
        lines.append(f"Time: {result.duration_ms} ms")
        lines.append(f"Speedup factor: {format_decimal(result.speedup_factor)}x")
        lines.append(f"Checksum: {result.accumulated_sum}")

    return "\n".join(lines)


def format_report(report: Report) -> str:
    """Render either kind of report as text."""
    if isinstance(report, AccuracyReport):
        return format_accuracy_report(report)
    if isinstance(report, PerformanceReport):
        return format_performance_report(report)
    raise TypeError(f"Unsupported report type: {type(report).__name__}")


def report_to_dict(report: Report) -> Dict[str, Any]:
    """
    Convert a report to JSON-serialisable data.

    Args:
        report: Accuracy or performance report

    Returns:
        Dictionary with a 'kind' key and the report fields
    """
    if isinstance(report, AccuracyReport):
        kind = 'accuracy'
    elif isinstance(report, PerformanceReport):
        kind = 'performance'
    else:
        raise TypeError(f"Unsupported report type: {type(report).__name__}")

    data = asdict(report)
    data['kind'] = kind
    for result in data['results']:
        if 'worst_cases' in result:
            result['worst_cases'] = list(result['worst_cases'])
    data['results'] = list(data['results'])
    return data


def _csv_rows(report: Report) -> List[Dict[str, Any]]:
    if isinstance(report, AccuracyReport):
        return [
            {
                'variant': stats.variant,
                'avg_abs_error': stats.avg_abs_error,
                'max_abs_error': stats.max_abs_error,
                'max_abs_error_input': stats.max_abs_error_input,
                'max_rel_error': stats.max_rel_error,
                'max_rel_error_input': stats.max_rel_error_input
            }
            for stats in report.results
        ]
    return [
        {
            'variant': result.variant,
            'duration_ns': result.duration_ns,
            'speedup_factor': result.speedup_factor,
            'accumulated_sum': result.accumulated_sum
        }
        for result in report.results
    ]


def export_report(report: Report, output_path: str, format: str = 'json'):
    """
    Export a report to disk.

    Args:
        report: Accuracy or performance report
        output_path: Output file path
        format: Export format ('json' or 'csv')
    """
    os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)

    if format == 'json':
        with open(output_path, 'w') as f:
            json.dump(report_to_dict(report), f, indent=2, default=str)

    elif format == 'csv':
        rows = _csv_rows(report)
        with open(output_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)

    else:
        raise ValueError(f"Unsupported export format: {format}. Use 'json' or 'csv'")
