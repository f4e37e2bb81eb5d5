"""
Pytest configuration and shared fixtures for foundation tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import requests  # noqa: E402

from core.config.runtime import set_default_config  # noqa: E402
from fixtures import make_header_bag, make_response  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def transport():
    """
    Patch requests.Session.send so no request leaves the process.

    Requests are still prepared for real; configure ``transport.return_value``
    or ``.side_effect`` and read back what was sent with ``captured``.
    """
    with patch.object(requests.Session, "send") as send:
        send.return_value = make_response('{"id": 1}')
        yield send


@pytest.fixture
def header_bag():
    """Provide a HeaderBag carrying a bearer token."""
    return make_header_bag()


@pytest.fixture
def connection_error():
    return requests.ConnectionError(
        "Failed to establish a new connection: [Errno 111] Connection refused"
    )


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep tests independent of the developer's FOUNDATION_* environment."""
    for name in (
        "FOUNDATION_HTTP_TIMEOUT",
        "FOUNDATION_HTTP_USER_AGENT",
        "FOUNDATION_UPSTREAM_URL",
        "FOUNDATION_UPSTREAM_TOKEN",
        "FOUNDATION_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
