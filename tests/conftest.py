"""
Pytest configuration and shared fixtures for logmessage tests.

Engines are built with an explicit build mode and a fixed-seed digest so
results do not depend on the environment of the machine running the tests.
"""

import os
import sys

import pytest

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logmessage import RedactionEngine, SeededDigest  # noqa: E402
from logmessage import config  # noqa: E402

TEST_SEED = b"logmessage-test-seed"


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch):
    """
    Remove build-mode variables before each test.
    This runs automatically before each test.
    """
    monkeypatch.delenv(config.BUILD_ENV_VAR, raising=False)
    monkeypatch.delenv(config.DEBUG_ENV_VAR, raising=False)
    yield


@pytest.fixture
def fixed_digest():
    """Provide a digest with a known seed."""
    return SeededDigest(seed=TEST_SEED)


@pytest.fixture
def debug_engine(fixed_digest):
    """Provide an engine behaving like a debug build."""
    return RedactionEngine(is_debug_build=True, digest=fixed_digest)


@pytest.fixture
def release_engine(fixed_digest):
    """Provide an engine behaving like a release build."""
    return RedactionEngine(is_debug_build=False, digest=fixed_digest)
