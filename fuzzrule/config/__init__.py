"""
fuzzrule Configuration Package - runtime settings for the fuzzrule package.
"""

from .settings import (
    InferenceSettings,
    LoggingSettings,
    clear_settings_cache,
    get_inference_settings,
    get_logging_settings,
)

__all__ = [
    "InferenceSettings",
    "LoggingSettings",
    "get_inference_settings",
    "get_logging_settings",
    "clear_settings_cache",
]
