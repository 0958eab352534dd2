"""
Version management for fuzzrule.

Reads the version from pyproject.toml, which serves as the single source of
truth, and falls back to the installed distribution metadata.
"""

from importlib import metadata
from pathlib import Path

import tomli

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"

_FALLBACK_VERSION = "0.0.0"


def get_version_from_pyproject() -> str:
    """
    Read the version string from pyproject.toml.

    Returns:
        str: Version string, or the installed distribution version when the
        project file is not available (e.g. a wheel install)
    """
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            pyproject_data = tomli.load(f)
        return pyproject_data["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        try:
            return metadata.version("fuzzrule")
        except metadata.PackageNotFoundError:
            return _FALLBACK_VERSION


__version__ = get_version_from_pyproject()


def get_version() -> str:
    """
    Get the current version of the fuzzrule package.

    Returns:
        str: Current version string
    """
    return __version__
