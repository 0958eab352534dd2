"""
Global pytest configuration for fuzzrule.
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "concurrency: mark tests that exercise parallel rule evaluation"
    )
    config.addinivalue_line(
        "markers", "stress: marks tests as stress tests over large rule sets"
    )


def pytest_addoption(parser):
    """Add command line options for stress tests."""
    parser.addoption(
        "--run-stress", action="store_true", default=False, help="Run stress tests"
    )


def pytest_collection_modifyitems(config, items):
    """Skip stress tests unless explicitly requested."""
    if config.getoption("--run-stress"):
        return

    skip_stress = pytest.mark.skip(reason="need --run-stress option to run")
    for item in items:
        if "stress" in item.keywords:
            item.add_marker(skip_stress)
