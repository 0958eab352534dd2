"""
Global test fixtures for the fuzzrule project.

This module contains test fixtures that can be used across all test modules.
"""

import copy

import pytest
import yaml

from fuzzrule.config.settings import clear_settings_cache

# Fan controller used across config, builder, batch and CLI tests.
#
# Decisions on the temperature grid:
#   0  -> cold fires at 1, slow {0, 25}      -> 12.5
#   20 -> warm fires at 1, medium {50}       -> 50.0
#   40 -> hot fires at 1, fast {75, 100}     -> 87.5
#   15 -> every strength below 1, all consequent degrees are 1 -> no decision
FAN_SYSTEM = {
    "universes": {
        "temperature": {"begin": 0, "end": 40, "step": 1},
        "fan_speed": {"domain": [0, 25, 50, 75, 100]},
    },
    "sets": {
        "temperature": {
            "cold": {"type": "triangular", "parameters": [0, 0, 20]},
            "warm": {"type": "triangular", "parameters": [10, 20, 30]},
            "hot": {"type": "triangular", "parameters": [20, 40, 40]},
        },
        "fan_speed": {
            "slow": {"type": "trapezoidal", "parameters": [0, 0, 25, 50]},
            "medium": {"type": "triangular", "parameters": [25, 50, 75]},
            "fast": {"type": "trapezoidal", "parameters": [50, 75, 100, 100]},
        },
    },
    "inputs": {"temperature": "temperature"},
    "output": "fan_speed",
    "operators": {"set": "min_max", "logic": "zadeh", "defuzzifier": "center_of_mass"},
    "rules": [
        {
            "name": "cool_down",
            "if": {"op": "is", "variable": "temperature", "set": "hot"},
            "then": "fast",
        },
        {
            "name": "keep",
            "if": {"op": "is", "variable": "temperature", "set": "warm"},
            "then": "medium",
        },
        {
            "name": "idle",
            "if": {"op": "is", "variable": "temperature", "set": "cold"},
            "then": "slow",
        },
    ],
}


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against default settings unless it overrides them."""
    for name in (
        "FUZZRULE_INFERENCE_MAX_WORKERS",
        "FUZZRULE_INFERENCE_PARALLEL",
        "FUZZRULE_INFERENCE_DOMAIN_TOLERANCE",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fan_system():
    """
    Fan controller system definition as a plain dictionary.

    Returns:
        dict: A deep copy that tests may modify freely.
    """
    return copy.deepcopy(FAN_SYSTEM)


@pytest.fixture
def fan_system_file(tmp_path, fan_system):
    """
    Fan controller system definition written to a YAML file.

    Returns:
        Path: Location of the YAML file.
    """
    path = tmp_path / "fan.yaml"
    path.write_text(yaml.safe_dump(fan_system, sort_keys=False))
    return path
