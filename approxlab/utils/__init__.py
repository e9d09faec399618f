"""
approxlab Utilities

Logging setup and reproducibility helpers.
"""

from approxlab.utils.logging import (
    setup_logger,
    log_run_start,
    log_run_end
)
from approxlab.utils.reproducibility import (
    set_random_seed,
    get_environment_info,
    create_run_id
)

__all__ = [
    'setup_logger',
    'log_run_start',
    'log_run_end',
    'set_random_seed',
    'get_environment_info',
    'create_run_id'
]
