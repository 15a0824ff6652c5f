"""
Shared pytest fixtures and configuration for faultline tests.

This module provides:
- Settings cache reset for environment-driven tests
- Process-wide catalog cleanup for test isolation
- structlog reset after tests that reconfigure logging
- A populated, frozen sample catalog

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_lookup(sample_catalog):
        ...
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
import structlog

# Ensure faultline package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from faultline.core.catalog import ErrorCatalog, reset_default_catalog
from faultline.core.settings import reset_settings


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_fixture() -> Generator[None, None, None]:
    """Re-read settings for every test so monkeypatched env vars apply."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def clean_default_catalog_fixture() -> Generator[None, None, None]:
    """Start and end every test with an empty process-wide catalog."""
    reset_default_catalog()
    yield
    reset_default_catalog()


@pytest.fixture
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults after a test that configures logging."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> ErrorCatalog:
    """Empty, unfrozen catalog."""
    return ErrorCatalog()


@pytest.fixture
def sample_catalog() -> ErrorCatalog:
    """
    Frozen catalog with a few DAS entries:

        DAS-1001  failed to connect to %s: %s
        DAS-1002  query failed on %s
        DAS-1003  x=%s
    """
    cat = ErrorCatalog()
    cat.register("DAS", 1001, "failed to connect to %s: %s")
    cat.register("DAS", 1002, "query failed on %s")
    cat.register("DAS", 1003, "x=%s")
    cat.freeze()
    return cat
