"""
Error handling framework for fuzzrule.

This module provides the exception hierarchy and the central error code
registry used across the package.
"""

from fuzzrule.errors.error_codes import ErrorCodes
from fuzzrule.errors.exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    FuzzruleError,
    InvalidConfigurationError,
    NoDecisionError,
    ProcessingError,
    ValidationError,
)

__all__ = [
    # Base exception
    "FuzzruleError",
    # Exception hierarchy
    "ValidationError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationFileError",
    "ProcessingError",
    "NoDecisionError",
    # Error codes
    "ErrorCodes",
]
