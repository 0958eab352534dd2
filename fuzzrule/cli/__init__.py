"""
Command Line Interface for fuzzrule.

This module provides a CLI for evaluating fuzzy inference systems defined in
YAML files, inspecting their universes and rules, and running batch
evaluations over CSV input tables.
"""

from fuzzrule.cli.app import app

__all__ = ["app"]
