"""
fuzzrule - fuzzy rule-set inference engine.
"""

from dotenv import load_dotenv

from fuzzrule.config.settings import get_logging_settings
from fuzzrule.logging import (
    configure_from_settings,
    configure_logging,
    get_logger,
    is_debug_mode,
    log_data_operation,
    log_entry_exit,
    log_performance,
    set_debug_mode,
)
from fuzzrule.version import __version__

# Load environment variables from .env file
load_dotenv()

configure_from_settings(get_logging_settings())

__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "set_debug_mode",
    "log_entry_exit",
    "log_performance",
    "log_data_operation",
]
