"""
Logging system for fuzzrule.

This module provides a centralized logging configuration with console and
rotating file outputs, and helper decorators for common logging patterns.
"""

from fuzzrule.logging.config import (
    configure_from_settings,
    configure_logging,
    get_component_log_levels,
    get_logger,
    is_debug_mode,
    set_component_log_level,
    set_debug_mode,
)
from fuzzrule.logging.helpers import (
    log_data_operation,
    log_entry_exit,
    log_performance,
)

__all__ = [
    # Configuration
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "set_debug_mode",
    "is_debug_mode",
    "set_component_log_level",
    "get_component_log_levels",
    # Helper methods
    "log_entry_exit",
    "log_performance",
    "log_data_operation",
]
