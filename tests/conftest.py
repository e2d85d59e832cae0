"""
Pytest configuration and shared fixtures for SchemaGuard tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure src is in path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schemaguard.validation import clear_validators


@pytest.fixture(autouse=True)
def reset_custom_validators():
    """Keep the global custom validator registry isolated per test."""
    clear_validators()
    yield
    clear_validators()
