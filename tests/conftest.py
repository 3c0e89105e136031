"""
Pytest configuration and shared fixtures for all syntree tests.

The S-expression parser is built once per session (Lark grammar compilation
is the only expensive setup); alias tables are built per test because they
record state.
"""

import sys
import random
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from syntree.frontend.sexpr import SexprParser
from syntree.passes.gensyms import AliasTable, first_unused, random_choice


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser(tmp_path_factory):
    """
    Session-scoped S-expression parser.

    Uses a private cache file so test runs never share Lark's cache with an
    installed copy of the package.
    """
    cache_file = tmp_path_factory.mktemp("lark") / "sexpr_parser.cache"
    return SexprParser(cache_file=str(cache_file))


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def deterministic_table():
    """Alias table that always picks the smallest unused animal name."""
    return AliasTable(strategy=first_unused)


@pytest.fixture
def seeded_table_factory():
    """Factory for reproducible random alias tables."""
    def _make(seed: int = 0, words=None) -> AliasTable:
        return AliasTable(words, strategy=random_choice(random.Random(seed)))

    return _make


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
