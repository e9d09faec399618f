"""
Reproducibility utilities for approxlab.

Provides random seed management and environment metadata for run records.
"""

import os
import platform
import random
import sys
from datetime import datetime
from typing import Any, Dict

import numpy as np


def get_library_version() -> str:
    """Get approxlab library version."""
    try:
        from approxlab import __version__
        return __version__
    except ImportError:
        return "unknown"


def set_random_seed(seed: int):
    """
    Set random seed for reproducibility.

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    os.environ['PYTHONHASHSEED'] = str(seed)
    np.random.seed(seed)


def get_environment_info() -> Dict[str, Any]:
    """
    Get environment information for reproducibility.

    Timings depend on the interpreter and machine, so they are recorded
    next to every result set.

    Returns:
        Dictionary with environment details
    """
    return {
        'timestamp': datetime.now().isoformat(),
        'python_version': sys.version,
        'python_implementation': platform.python_implementation(),
        'platform': sys.platform,
        'machine': platform.machine(),
        'processor': platform.processor(),
        'approxlab_version': get_library_version(),
        'numpy_version': np.__version__
    }


def create_run_id(prefix: str = "run") -> str:
    """
    Create a unique run ID.

    Args:
        prefix: Prefix for run ID

    Returns:
        Run ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = random.randint(1000, 9999)
    return f"{prefix}_{timestamp}_{random_suffix}"
