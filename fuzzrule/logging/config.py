"""
Logging configuration for fuzzrule.

All handlers are attached to the ``fuzzrule`` package logger, never to the
root logger, so an application embedding the engine keeps control of its own
logging. Once configured the package logger stops propagating, so records
are not written a second time by root handlers.

Levels can be tuned per component (the part of a module name after
``fuzzrule.``), for example ``fuzzy.sets`` or ``fuzzy.rules``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

if TYPE_CHECKING:
    from fuzzrule.config.settings import LoggingSettings

PACKAGE_LOGGER = "fuzzrule"
LOG_FILE_NAME = "fuzzrule.log"

_debug_mode = False

# Set lookups run once per rule per inference, so they stay at INFO unless
# asked otherwise
_component_levels: Dict[str, int] = {
    "fuzzy.sets": logging.INFO,
}

FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s.%(funcName)s:%(lineno)d | %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[94m",
    logging.INFO: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[91m\033[1m",
}


class ColorFormatter(logging.Formatter):
    """Console formatter that colors the level name.

    The record itself is left untouched so other handlers format the plain
    level name.
    """

    def __init__(self, fmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno)
        if not (self.use_color and color):
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(colored)


def _component_of(name: str) -> str:
    prefix = f"{PACKAGE_LOGGER}."
    return name[len(prefix):] if name.startswith(prefix) else name


def _matches(name: str, component: str) -> bool:
    module = _component_of(name)
    return module == component or module.startswith(f"{component}.")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger, applying the level configured for its component.

    Args:
        name: Logger name, normally ``__name__`` of the calling module

    Returns:
        The logger for ``name``
    """
    logger = logging.getLogger(name)
    for component, level in _component_levels.items():
        if _matches(name, component):
            logger.setLevel(level)
            break
    return logger


def set_component_log_level(component: str, level: int) -> None:
    """
    Set the log level of one component and of its existing loggers.

    Args:
        component: Component name such as ``fuzzy.rules``
        level: Logging level
    """
    _component_levels[component] = level
    for name in list(logging.Logger.manager.loggerDict):
        if _matches(name, component):
            logging.getLogger(name).setLevel(level)


def get_component_log_levels() -> Dict[str, int]:
    """Copy of the configured component levels."""
    return dict(_component_levels)


def set_debug_mode(enabled: bool) -> None:
    """
    Switch the package logger between DEBUG and INFO.

    Args:
        enabled: True to log debug records
    """
    global _debug_mode
    if enabled == _debug_mode:
        return

    _debug_mode = enabled
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if enabled else logging.INFO)
    package_logger.info(f"Debug mode {'enabled' if enabled else 'disabled'}")


def is_debug_mode() -> bool:
    return _debug_mode


def _console_handler(level: int, fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColorFormatter(fmt, use_color=sys.stdout.isatty()))
    return handler


def _file_handler(
    log_dir: Union[str, Path], level: int, fmt: str, max_bytes: int, backup_count: int
) -> logging.Handler:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=log_path / LOG_FILE_NAME,
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    console_format: str = CONSOLE_FORMAT,
    file_format: str = FILE_FORMAT,
    debug_mode: Optional[bool] = None,
) -> None:
    """
    (Re)install the package handlers.

    Any handler previously installed by this function is closed and
    replaced, so calling it again is how the CLI changes verbosity.

    Args:
        log_dir: Directory for a rotating ``fuzzrule.log``; console only when None
        console_level: Level of the console handler
        file_level: Level of the file handler
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files kept
        console_format: Format string for the console handler
        file_format: Format string for the file handler
        debug_mode: Override the global debug flag; keeps it when None
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(logging.DEBUG if is_debug_mode() else logging.INFO)
    package_logger.addHandler(_console_handler(console_level, console_format))
    if log_dir:
        package_logger.addHandler(
            _file_handler(log_dir, file_level, file_format, max_bytes, backup_count)
        )

    package_logger.debug(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"log_dir={log_dir or '-'}"
    )

    if debug_mode is not None:
        set_debug_mode(debug_mode)


def configure_from_settings(settings: "LoggingSettings") -> None:
    """Configure logging from ``FUZZRULE_LOGGING_*`` settings."""
    level = logging.getLevelName(settings.level.upper())
    configure_logging(
        log_dir=settings.log_dir,
        console_level=level if isinstance(level, int) else logging.INFO,
    )
