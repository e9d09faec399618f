"""
Centralized logging for approxlab.

Provides console and rotating file logging plus run start/end banners.
"""

import json
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional


def setup_logger(
    name: str = "approxlab",
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Set up a logger with file and console handlers.

    Args:
        name: Logger name
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (default: ./logs)
        log_file: Log file name (default: approxlab_YYYYMMDD.log)
        console_output: Whether to output to console

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if log_dir is None:
        log_dir = "./logs"

    os.makedirs(log_dir, exist_ok=True)

    if log_file is None:
        log_file = f"approxlab_{datetime.now().strftime('%Y%m%d')}.log"

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, log_file),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    return logger


def log_run_start(
    logger: logging.Logger,
    config: Dict[str, Any],
    run_id: Optional[str] = None
):
    """
    Log run start with its configuration.

    Args:
        logger: Logger instance
        config: Run configuration dictionary
        run_id: Optional run ID
    """
    logger.info("=" * 70)
    logger.info("EVALUATION START")
    logger.info("=" * 70)

    if run_id:
        logger.info(f"Run ID: {run_id}")

    logger.info(f"Timestamp: {datetime.now().isoformat()}")
    logger.info(f"Configuration: {json.dumps(config, indent=2)}")
    logger.info("=" * 70)


def log_run_end(
    logger: logging.Logger,
    metrics: Dict[str, Any],
    run_id: Optional[str] = None
):
    """
    Log run end with summary metrics.

    Args:
        logger: Logger instance
        metrics: Summary metrics dictionary
        run_id: Optional run ID
    """
    logger.info("=" * 70)
    logger.info("EVALUATION END")
    logger.info("=" * 70)

    if run_id:
        logger.info(f"Run ID: {run_id}")

    logger.info(f"Timestamp: {datetime.now().isoformat()}")
    logger.info(f"Metrics: {json.dumps(metrics, indent=2)}")
    logger.info("=" * 70)
