"""Shared fixtures for VirtUI tests."""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
from mcp.server.fastmcp import FastMCP
from starlette.testclient import TestClient

from virtui.config import VirtUIConfig
from virtui.server import VirtUIServer


@pytest.fixture
def mock_k8s() -> MagicMock:
    """Create a connected mock K8sClient."""
    k8s = MagicMock()
    k8s.is_connected = True
    return k8s


@pytest.fixture
def server(mock_k8s: MagicMock) -> VirtUIServer:
    """Create a server wired to the mock K8sClient."""
    server = VirtUIServer(VirtUIConfig(default_namespace="default", read_only_mode=False))
    server._k8s_client = mock_k8s
    return server


@pytest.fixture
def read_only(server: VirtUIServer) -> VirtUIServer:
    """Switch the server to read-only mode."""
    server._config = VirtUIConfig(default_namespace="default", read_only_mode=True)
    return server


@pytest.fixture
def api_factory(
    server: VirtUIServer,
) -> Generator[Callable[[Callable[[FastMCP, VirtUIServer], None]], TestClient], Any, None]:
    """Build a TestClient serving the routes registered by a register_routes function."""
    clients: list[TestClient] = []

    def _make(register_routes: Callable[[FastMCP, VirtUIServer], None]) -> TestClient:
        mcp = FastMCP(name="test-server")
        register_routes(mcp, server)
        client = TestClient(mcp.streamable_http_app())
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
