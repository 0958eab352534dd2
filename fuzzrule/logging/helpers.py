"""
Logging decorators used on the engine's entry points.

- ``log_entry_exit``: entry, exit and failure of a call (machine building)
- ``log_performance``: duration of hot paths (rule set evaluation)
- ``log_data_operation``: start and completion of bulk work (batch runs)
"""

import functools
import inspect
import logging
import time
from collections.abc import Sized
from typing import Any, Callable, Optional, TypeVar, cast

from fuzzrule.logging.config import get_logger

F = TypeVar("F", bound=Callable[..., Any])

_MAX_RESULT_LENGTH = 1000


def _format_value(value: Any) -> str:
    if isinstance(value, (bool, int, float, str)):
        return str(value)
    text = repr(value)
    if len(text) > _MAX_RESULT_LENGTH:
        text = text[: _MAX_RESULT_LENGTH - 3] + "..."
    return text


def _format_arguments(func: Callable[..., Any], args: tuple, kwargs: dict) -> str:
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        # Let the call itself report the bad arguments
        parts = [_format_value(arg) for arg in args]
        parts += [f"{name}={_format_value(value)}" for name, value in kwargs.items()]
        return ", ".join(parts)
    return ", ".join(
        f"{name}={_format_value(value)}" for name, value in bound.arguments.items()
    )


def log_entry_exit(
    logger: Optional[logging.Logger] = None,
    log_args: bool = False,
    log_result: bool = False,
    entry_level: int = logging.DEBUG,
    exit_level: int = logging.DEBUG,
    error_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Log when a function is entered, left, or fails.

    Args:
        logger: Logger to use; defaults to the decorated function's module logger
        log_args: Include the call arguments in the entry message
        log_result: Include the return value in the exit message
        entry_level: Level of the entry message
        exit_level: Level of the exit message
        error_level: Level of the failure message

    Returns:
        Decorator; exceptions are logged and re-raised unchanged
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)
        name = func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            message = f"Entering {name}"
            if log_args and (args or kwargs):
                message += f" with args: {_format_arguments(func, args, kwargs)}"
            log.log(entry_level, message)

            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.log(
                    error_level,
                    f"Error in {name} after {time.perf_counter() - started:.3f}s: {e}",
                )
                raise

            message = f"Exiting {name} after {time.perf_counter() - started:.3f}s"
            if log_result:
                message += f" with result: {_format_value(result)}"
            log.log(exit_level, message)
            return result

        return cast(F, wrapper)

    return decorator


def log_performance(
    logger: Optional[logging.Logger] = None,
    threshold_ms: float = 0,
    log_level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Log how long a call took.

    Args:
        logger: Logger to use; defaults to the decorated function's module logger
        threshold_ms: Only calls at least this slow are logged (0 logs all)
        log_level: Level of the timing message

    Returns:
        Decorator
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                if elapsed_ms >= threshold_ms and log.isEnabledFor(log_level):
                    log.log(
                        log_level,
                        f"Performance: {func.__qualname__} took {elapsed_ms:.2f}ms",
                    )

        return cast(F, wrapper)

    return decorator


def log_data_operation(
    operation: str,
    data_type: str,
    logger: Optional[logging.Logger] = None,
    log_level: int = logging.INFO,
) -> Callable[[F], F]:
    """
    Log the start and the outcome of an operation over a batch of data.

    Args:
        operation: What is being done, e.g. "evaluation"
        data_type: What it is done to, e.g. "input rows"
        logger: Logger to use; defaults to the decorated function's module logger
        log_level: Level of the start and completion messages

    Returns:
        Decorator; failures are logged at ERROR and re-raised
    """
    label = f"{operation} of {data_type}"

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log.log(log_level, f"Started {label}")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error(f"Failed {label} after {time.perf_counter() - started:.3f}s: {e}")
                raise

            message = f"Completed {label} in {time.perf_counter() - started:.3f}s"
            if isinstance(result, Sized):
                message += f" ({len(result)} items)"
            log.log(log_level, message)
            return result

        return cast(F, wrapper)

    return decorator
