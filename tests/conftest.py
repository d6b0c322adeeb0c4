"""Shared fixtures for uilens tests."""

import textwrap
from pathlib import Path

import pytest

from uilens.analyzer import analyze_source

FIXTURES = Path(__file__).parent / 'fixtures'


@pytest.fixture
def analyze():
    """Analyze an inline snippet as if it were a file with the given name."""
    def _analyze(code: str, file_name: str = 'example.tsx', **kwargs):
        return analyze_source(textwrap.dedent(code).encode('utf-8'), file_name, **kwargs)
    return _analyze


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES
