"""
Pytest configuration and fixtures for ingest-engine tests

This module provides shared fixtures for unit and integration tests.
"""
import os
from typing import Any

import pytest


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that exercise several components together"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# RECORD FIXTURES
# =======================

@pytest.fixture
def clean_record() -> dict[str, Any]:
    """A record that passes every default rule and scores 100"""
    return {
        "title": "FDA clears new cardiac monitoring device",
        "description": (
            "The FDA has granted 510(k) clearance to a wearable cardiac monitor "
            "intended for continuous arrhythmia detection in adults."
        ),
        "published_at": "2024-01-15T10:30:00.000Z",
        "source": "FDA",
        "region": "US",
    }


@pytest.fixture
def dirty_record() -> dict[str, Any]:
    """A record with a missing title and a mangled date"""
    return {
        "description": "Short text",
        "published_at": "unknown",
        "source": "X",
        "region": "Mars",
    }


@pytest.fixture
def regulatory_batch(clean_record) -> list[dict[str, Any]]:
    """Mixed batch: a clean record, a near-duplicate of it, and an unrelated one"""
    near_duplicate = dict(clean_record)
    near_duplicate["title"] = "FDA clears new cardiac monitoring devices"
    return [
        clean_record,
        near_duplicate,
        {
            "title": "EMA publishes guidance on clinical trial transparency",
            "description": (
                "The European Medicines Agency released updated guidance covering "
                "the publication of clinical trial results."
            ),
            "published_at": "2024-03-02",
            "source": "EMA",
            "region": "EU",
        },
    ]


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def config_dir() -> str:
    """
    Get path to the repository config directory

    Returns:
        Path to config/
    """
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "config")


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_env_vars(config_dir):
    """
    Set test environment variables

    This fixture loads test.env and sets environment variables
    """
    from dotenv import load_dotenv

    env_path = os.path.join(config_dir, "test.env")

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)
