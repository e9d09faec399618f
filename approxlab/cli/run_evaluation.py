"""
Main CLI entry point for running approxlab evaluations.

Usage:
    python -m approxlab.cli.run_evaluation --config configs/sine.yaml
    python -m approxlab.cli.run_evaluation --mode accuracy --start 0 --end 6.283185307179586 --points 10000
"""

import json
import os
import sys
from typing import Any, Dict, Optional

import yaml

from approxlab.config import RunConfig, create_argparser, load_config, merge_config_with_args
from approxlab.errors import ConfigurationError
from approxlab.evaluation import AccuracyEvaluator, PerformanceEvaluator
from approxlab.registry import FamilyRegistry, default_registry
from approxlab.reporting import format_accuracy_report, format_performance_report, report_to_dict
from approxlab.utils.logging import log_run_end, log_run_start, setup_logger
from approxlab.utils.reproducibility import create_run_id, get_environment_info, set_random_seed


def build_evaluators(config: RunConfig, registry: FamilyRegistry) -> Dict[str, Any]:
    """
    Resolve the configured family and construct the evaluators for the run.

    Every evaluator checks its inputs on construction, so all of them are
    built before any of them samples a function.

    Args:
        config: Run configuration
        registry: Family registry

    Returns:
        Dictionary with the family, the selected variants and an 'accuracy'
        and/or 'performance' evaluator, depending on the run mode

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    errors = config.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))

    family = registry.get(config.family)
    reference = family.reference(config.reference)
    variants = family.select_variants(config.variants)

    evaluators: Dict[str, Any] = {'family': family, 'variants': variants}

    if config.mode in ('accuracy', 'both'):
        default_start, default_end = family.default_range()
        start = config.accuracy.start if config.accuracy.start is not None else default_start
        end = config.accuracy.end if config.accuracy.end is not None else default_end
        evaluators['accuracy'] = AccuracyEvaluator(
            reference, variants, start, end, config.accuracy.points,
            report_worst=config.accuracy.report_worst,
            family_name=family.name
        )

    if config.mode in ('performance', 'both'):
        evaluators['performance'] = PerformanceEvaluator(
            reference, variants, config.performance.iterations,
            pool_size=config.performance.pool_size,
            low=config.performance.pool_low,
            high=config.performance.pool_high,
            seed=config.performance.seed,
            family_name=family.name
        )

    return evaluators


def run_evaluation(
    config: RunConfig,
    registry: Optional[FamilyRegistry] = None,
    logger=None
) -> Dict[str, Any]:
    """
    Run the evaluations selected by the configuration.

    Args:
        config: Run configuration
        registry: Family registry (default: a fresh default registry)
        logger: Optional logger instance

    Returns:
        Dictionary with run results, including the report objects under
        'accuracy_report' / 'performance_report'

    Raises:
        ConfigurationError: If the family, reference or variants are unknown
            or the evaluation parameters are invalid. Nothing is sampled and
            no output file is written in that case.
    """
    if registry is None:
        registry = default_registry()

    # Checked before the logger is set up, which needs a valid log level
    evaluators = build_evaluators(config, registry)
    family = evaluators['family']

    if logger is None:
        logger = setup_logger(
            name="approxlab",
            log_level=config.log_level,
            log_dir=os.path.join(config.output_dir, "logs")
        )

    if config.performance.seed is not None:
        set_random_seed(config.performance.seed)

    run_id = create_run_id()
    logger.info(f"Starting evaluation: {run_id}")
    log_run_start(logger, config.to_dict(), run_id)

    os.makedirs(config.output_dir, exist_ok=True)

    env_info = get_environment_info()
    env_info['run_id'] = run_id
    env_info['random_seed'] = config.performance.seed
    with open(os.path.join(config.output_dir, 'environment.json'), 'w') as f:
        json.dump(env_info, f, indent=2)

    try:
        logger.info(f"Family: {family.name}, reference: {config.reference}, "
                    f"variants: {', '.join(v.name for v in evaluators['variants'])}")

        results: Dict[str, Any] = {
            'run_id': run_id,
            'config': config.to_dict()
        }
        summary: Dict[str, Any] = {}

        if 'accuracy' in evaluators:
            logger.info("Running accuracy evaluation...")
            accuracy_report = evaluators['accuracy'].evaluate()
            results['accuracy_report'] = accuracy_report
            results['accuracy'] = report_to_dict(accuracy_report)
            summary['max_abs_error'] = {
                stats.variant: stats.max_abs_error for stats in accuracy_report.results
            }

        if 'performance' in evaluators:
            logger.info("Running performance evaluation...")
            performance_report = evaluators['performance'].evaluate()
            results['performance_report'] = performance_report
            results['performance'] = report_to_dict(performance_report)
            summary['speedup_factor'] = {
                result.variant: result.speedup_factor for result in performance_report.results
            }

        serialisable = {k: v for k, v in results.items() if not k.endswith('_report')}
        results_path = os.path.join(config.output_dir, 'results.json')
        with open(results_path, 'w') as f:
            json.dump(serialisable, f, indent=2, default=str)

        logger.info(f"Results saved to {results_path}")
        log_run_end(logger, summary, run_id)

        return results

    except Exception as e:
        logger.error(f"Evaluation failed: {e}", exc_info=True)
        raise


def main(argv=None):
    """Main CLI entry point."""
    parser = create_argparser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else RunConfig()
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: could not load config: {e}", file=sys.stderr)
        sys.exit(1)

    config = merge_config_with_args(config, args)

    errors = config.validate()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    try:
        results = run_evaluation(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    if 'accuracy_report' in results:
        print()
        print(format_accuracy_report(results['accuracy_report']))
    if 'performance_report' in results:
        print()
        print(format_performance_report(results['performance_report']))
    print()
    print(f"Results saved to: {config.output_dir}")


if __name__ == "__main__":
    main()
