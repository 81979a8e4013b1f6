"""Shared fixtures for launcher tests."""

import sys
from pathlib import Path

import pytest

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from run import PrerequisiteChecker


@pytest.fixture
def checker_factory():
    """Factory that creates a PrerequisiteChecker over a fake environment.

    Usage:
        checker = checker_factory(GEMINI_API_KEY="abc")
    """
    def _factory(**env: str) -> PrerequisiteChecker:
        return PrerequisiteChecker(env=dict(env))
    return _factory
