"""
Helper modules for the grid deployer.
"""

# Import the logger functions for convenience
from .unified_logger import (
    get_logger,
    get_strategy_logger,
    get_service_logger,
    get_deployment_logger,
    get_core_logger,
    log_stage,
)
from .debounce import Debouncer
from .numbers import parse_finite_number, parse_non_negative_int, is_blank

__all__ = [
    'get_logger',
    'get_strategy_logger',
    'get_service_logger',
    'get_deployment_logger',
    'get_core_logger',
    'log_stage',
    'Debouncer',
    'parse_finite_number',
    'parse_non_negative_int',
    'is_blank',
]
