"""
Pytest configuration and fixtures for zuspec-be-opt tests.
"""
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def opt():
    """Optimizer on the main context, released after the test."""
    from zuspec.be.opt import Optimizer

    with Optimizer.create() as o:
        yield o


@pytest.fixture(autouse=True)
def _no_env_timeout(monkeypatch):
    monkeypatch.delenv("ZUSPEC_OPT_TIMEOUT_MS", raising=False)
