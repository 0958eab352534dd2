"""
fuzzrule Settings Manager - Runtime configuration management.

Settings are read from environment variables (and a `.env` file loaded on
package import) with sensible defaults for in-process use.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InferenceSettings(BaseSettings):
    """Inference Settings.

    Environment variables:
        FUZZRULE_INFERENCE_MAX_WORKERS: Upper bound on rule evaluation threads.
            Unset means one per available CPU.
        FUZZRULE_INFERENCE_PARALLEL: Evaluate rules on a thread pool.
            Default: true
        FUZZRULE_INFERENCE_DOMAIN_TOLERANCE: Relative tolerance used when
            deciding whether the end of a (begin, end, step) range lies on
            the grid. Default: 1e-9
    """

    max_workers: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum number of worker threads for rule evaluation",
    )
    parallel: bool = Field(
        default=True,
        description="Evaluate rules concurrently on a thread pool",
    )
    domain_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        lt=1.0,
        description="Relative tolerance for including the range end in a domain",
    )

    model_config = SettingsConfigDict(env_prefix="FUZZRULE_INFERENCE_")


class LoggingSettings(BaseSettings):
    """Logging Settings."""

    level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(
        default=None, description="Directory for rotating log files"
    )

    model_config = SettingsConfigDict(env_prefix="FUZZRULE_LOGGING_")


@lru_cache
def get_inference_settings() -> InferenceSettings:
    """Get inference settings with caching."""
    return InferenceSettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get logging settings with caching."""
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Clear cached settings so the next getter call re-reads the environment."""
    get_inference_settings.cache_clear()
    get_logging_settings.cache_clear()
