"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))

from autocomplete.documents import IndexedDocument


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("REDIS_URL", "redis://localhost:6379")


@pytest.fixture
def d1() -> IndexedDocument:
    return IndexedDocument(
        identifier="123",
        term="Test SEARCH term!",
        payload={"id": "123", "name": "Test SEARCH term!"},
    )


@pytest.fixture
def d2() -> IndexedDocument:
    return IndexedDocument(
        identifier="345",
        term="Another search TERM",
        payload={"id": "345", "name": "Another search TERM"},
    )
