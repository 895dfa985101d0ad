"""Shared pytest configuration for the TreeSet test suite."""

import sys
from pathlib import Path

from hypothesis import settings

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test, skipped by run_tests.py")


settings.register_profile("treeset", deadline=None)
settings.load_profile("treeset")
