"""Fixtures shared by the domain tool tests."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def tools() -> tuple[dict, MagicMock]:
    """Capture the registered tool functions by name."""
    captured: dict = {}

    def capture_tool():
        def decorator(f):
            captured[f.__name__] = f
            return f

        return decorator

    mcp = MagicMock()
    mcp.tool = capture_tool
    return captured, mcp


@pytest.fixture
def mock_server() -> MagicMock:
    """Create a mock VirtUIServer."""
    server = MagicMock()
    server.config.default_namespace = "default"
    return server
