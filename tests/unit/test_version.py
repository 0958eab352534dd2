"""Tests for package version lookup."""

import fuzzrule
from fuzzrule import version


def test_version_matches_pyproject():
    assert version.get_version() == "0.1.0"
    assert fuzzrule.__version__ == version.get_version()


def test_missing_pyproject_falls_back(monkeypatch, tmp_path):
    monkeypatch.setattr(version, "PYPROJECT_PATH", tmp_path / "pyproject.toml")

    assert isinstance(version.get_version_from_pyproject(), str)
