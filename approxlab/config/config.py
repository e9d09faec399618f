"""
Configuration management for approxlab evaluation runs.

Supports YAML/JSON config files and command-line argument integration.
"""

import argparse
import json
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from approxlab.errors import ConfigurationError
from approxlab.evaluation.performance import DEFAULT_POOL_HIGH, DEFAULT_POOL_LOW, DEFAULT_POOL_SIZE

RUN_MODES = ("accuracy", "performance", "both")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _check_section(data: Any, config_cls: type, section: str) -> Dict[str, Any]:
    """Copy a config section, rejecting non-mappings and unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config section '{section}' must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - {f.name for f in fields(config_cls)})
    if unknown:
        raise ConfigurationError(f"Unknown keys in config section '{section}': {', '.join(map(str, unknown))}")
    return dict(data)


@dataclass
class AccuracyConfig:
    """Accuracy run configuration."""
    start: Optional[float] = None  # None uses the family default
    end: Optional[float] = None
    points: int = 10000
    report_worst: bool = True


@dataclass
class PerformanceConfig:
    """Performance run configuration."""
    iterations: int = 1000000
    pool_size: int = DEFAULT_POOL_SIZE
    pool_low: float = DEFAULT_POOL_LOW
    pool_high: float = DEFAULT_POOL_HIGH
    seed: Optional[int] = None


@dataclass
class RunConfig:
    """Complete evaluation run configuration."""
    name: str = "default_run"
    description: str = ""
    family: str = "Sin Approximations"
    reference: str = "sin"
    variants: List[str] = field(default_factory=list)  # empty selects every variant
    mode: str = "both"  # accuracy, performance, both
    accuracy: AccuracyConfig = field(default_factory=AccuracyConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    output_dir: str = "./results"
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RunConfig':
        """
        Create config from dictionary.

        Raises:
            ConfigurationError: If data is not a mapping or holds unknown keys
        """
        if data is None:
            data = {}
        data = _check_section(data, cls, 'config')
        if 'accuracy' in data:
            data['accuracy'] = AccuracyConfig(**_check_section(data['accuracy'], AccuracyConfig, 'accuracy'))
        if 'performance' in data:
            data['performance'] = PerformanceConfig(
                **_check_section(data['performance'], PerformanceConfig, 'performance')
            )
        if 'variants' in data and data['variants'] is None:
            data['variants'] = []
        return cls(**data)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.mode not in RUN_MODES:
            errors.append(f"Mode must be one of {', '.join(RUN_MODES)}")

        if not self.family:
            errors.append("Function family must be set")

        if not self.reference:
            errors.append("Reference implementation must be set")

        if self.accuracy.points <= 0:
            errors.append("Test points must be positive")

        if self.performance.iterations <= 0:
            errors.append("Performance iterations must be positive")

        if self.performance.pool_size <= 0:
            errors.append("Sample pool size must be positive")

        if self.performance.pool_low >= self.performance.pool_high:
            errors.append("Sample pool lower bound must be below the upper bound")

        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"Log level must be one of {', '.join(LOG_LEVELS)}")

        return errors


class Config:
    """Main configuration class."""

    @staticmethod
    def load_yaml(filepath: str) -> RunConfig:
        """Load configuration from YAML file."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f)

        return RunConfig.from_dict(data)

    @staticmethod
    def load_json(filepath: str) -> RunConfig:
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return RunConfig.from_dict(data)

    @staticmethod
    def save_yaml(config: RunConfig, filepath: str):
        """Save configuration to YAML file."""
        os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    @staticmethod
    def save_json(config: RunConfig, filepath: str):
        """Save configuration to JSON file."""
        os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)

        with open(filepath, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)


def load_config(filepath: str) -> RunConfig:
    """Load configuration from file (auto-detect YAML/JSON)."""
    ext = os.path.splitext(filepath)[1].lower()

    if ext in ['.yaml', '.yml']:
        return Config.load_yaml(filepath)
    elif ext == '.json':
        return Config.load_json(filepath)
    else:
        raise ValueError(f"Unsupported config file format: {ext}. Use .yaml, .yml, or .json")


def save_config(config: RunConfig, filepath: str):
    """Save configuration to file (auto-detect YAML/JSON)."""
    ext = os.path.splitext(filepath)[1].lower()

    if ext in ['.yaml', '.yml']:
        Config.save_yaml(config, filepath)
    elif ext == '.json':
        Config.save_json(config, filepath)
    else:
        raise ValueError(f"Unsupported config file format: {ext}. Use .yaml, .yml, or .json")


def create_argparser() -> argparse.ArgumentParser:
    """Create argument parser with common config options."""
    parser = argparse.ArgumentParser(description='approxlab evaluation runner')

    parser.add_argument('--config', type=str, help='Path to config file (YAML/JSON)')
    parser.add_argument('--family', type=str, help='Function family name')
    parser.add_argument('--reference', type=str, help='Reference implementation name')
    parser.add_argument('--variants', type=str, nargs='+', help='Variant names (default: all)')
    parser.add_argument('--mode', type=str, choices=RUN_MODES, help='What to run')
    parser.add_argument('--start', type=float, help='Accuracy range start')
    parser.add_argument('--end', type=float, help='Accuracy range end')
    parser.add_argument('--points', type=int, help='Accuracy test points')
    parser.add_argument('--report-worst', dest='report_worst', action='store_true', default=None,
                        help='Report worst-case inputs')
    parser.add_argument('--no-report-worst', dest='report_worst', action='store_false',
                        help='Skip worst-case inputs')
    parser.add_argument('--iterations', type=int, help='Performance iterations')
    parser.add_argument('--seed', type=int, help='Seed for the benchmark input pool')
    parser.add_argument('--output-dir', type=str, help='Output directory')
    parser.add_argument('--log-level', type=str, help='Logging level')

    return parser


def merge_config_with_args(config: RunConfig, args: argparse.Namespace) -> RunConfig:
    """Merge command-line arguments into config."""
    if args.family:
        config.family = args.family
    if args.reference:
        config.reference = args.reference
    if args.variants:
        config.variants = list(args.variants)
    if args.mode:
        config.mode = args.mode
    if args.start is not None:
        config.accuracy.start = args.start
    if args.end is not None:
        config.accuracy.end = args.end
    if args.points is not None:
        config.accuracy.points = args.points
    if args.report_worst is not None:
        config.accuracy.report_worst = args.report_worst
    if args.iterations is not None:
        config.performance.iterations = args.iterations
    if args.seed is not None:
        config.performance.seed = args.seed
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.log_level:
        config.log_level = args.log_level

    return config
