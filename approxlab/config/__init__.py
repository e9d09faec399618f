"""
approxlab Configuration Management

This module provides configuration management for evaluation runs.
"""

from approxlab.config.config import (
    Config,
    RunConfig,
    AccuracyConfig,
    PerformanceConfig,
    load_config,
    save_config,
    create_argparser,
    merge_config_with_args
)

__all__ = [
    'Config',
    'RunConfig',
    'AccuracyConfig',
    'PerformanceConfig',
    'load_config',
    'save_config',
    'create_argparser',
    'merge_config_with_args'
]
