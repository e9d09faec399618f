"""
Reporting of evaluation results.

Turns the structured reports returned by the evaluators into text and files.
"""

from approxlab.reporting.results import (
    format_decimal,
    format_accuracy_report,
    format_performance_report,
    format_report,
    report_to_dict,
    export_report
)

__all__ = [
    'format_decimal',
    'format_accuracy_report',
    'format_performance_report',
    'format_report',
    'report_to_dict',
    'export_report'
]
