"""
Shared pytest configuration and fixtures
"""
import os
import sys

import pytest

# Make the project root importable without installing the package
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from equal_distribution.config import reset_config  # noqa: E402


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "integration: tests that drive a real storage backend")
    config.addinivalue_line("markers", "slow: tests that take more than a few seconds")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from EQDIST_* variables of the surrounding shell"""
    for name in ("EQDIST_TRANSFER_TIMEOUT_SEC", "EQDIST_LOG_BINS", "EQDIST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
