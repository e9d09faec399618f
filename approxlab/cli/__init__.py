"""
approxlab CLI Module

Command-line interface for running evaluations.
"""

from approxlab.cli.run_evaluation import build_evaluators, main, run_evaluation

__all__ = ['main', 'run_evaluation', 'build_evaluators']
