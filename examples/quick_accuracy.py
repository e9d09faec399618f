"""
Quick Accuracy Check - Compare the sine approximations with math.sin

Run this to see error statistics for every bundled variant over one period
and over a narrow range around zero, plus a short timing run.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math

from approxlab.functions import sine_family
from approxlab.evaluation import evaluate_accuracy, evaluate_performance, sample_error_series
from approxlab.reporting import format_accuracy_report, format_performance_report


def main():
    family = sine_family()
    reference = family.reference('sin')
    start, end = family.default_range()

    # Full period
    report = evaluate_accuracy(
        reference, family.variants(), start, end, 10000,
        report_worst=True, family_name=family.name
    )
    print(format_accuracy_report(report))

    # Near zero, where the polynomial variants are strongest
    print()
    narrow = evaluate_accuracy(
        reference, family.variants(), -math.pi / 4, math.pi / 4, 10000,
        family_name=family.name
    )
    print(format_accuracy_report(narrow))

    # Where does each variant lose accuracy?
    print()
    print("Error profile over [-pi, pi] (max error per eighth of the range):")
    for series in sample_error_series(reference, family.variants(), start, end, 801):
        chunks = [series.y[i * 100:(i + 1) * 100 + 1].max() for i in range(8)]
        print(f"  {series.name}:")
        print("    " + " ".join(f"{c:.1e}" for c in chunks))

    print()
    performance = evaluate_performance(
        reference, family.variants(), 200000, seed=42, family_name=family.name
    )
    print(format_performance_report(performance))


if __name__ == "__main__":
    main()
