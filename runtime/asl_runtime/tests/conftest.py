"""
Pytest configuration and fixtures for asl_runtime tests.
"""

import pytest
import sys
import os

# Add grandparent directory to path for imports (to find asl_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from asl_runtime import ASLInterpreter, InterpreterConfig


@pytest.fixture
def interpreter():
    """Interpreter with the default settings (32-bit wrap, permissive)."""
    return ASLInterpreter()


@pytest.fixture
def strict_interpreter():
    """Interpreter that rejects trailing tokens."""
    return ASLInterpreter(InterpreterConfig(strict=True))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ASL_* settings inherited from the calling shell."""
    for name in ('ASL_INT_BITS', 'ASL_OVERFLOW', 'ASL_STRICT'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
