"""Tests for the /api/health endpoint."""

from collections.abc import Generator
from http import HTTPStatus
from typing import Any
from unittest.mock import MagicMock

import pytest
from mcp.server.fastmcp import FastMCP
from starlette.testclient import TestClient

from virtui.config import VirtUIConfig
from virtui.server import VirtUIServer


@pytest.fixture
def bare_server() -> VirtUIServer:
    return VirtUIServer(VirtUIConfig())


@pytest.fixture
def health_api(bare_server: VirtUIServer) -> Generator[TestClient, Any, None]:
    """TestClient serving only the health route."""
    mcp = FastMCP(name="test-server")
    bare_server._register_health_endpoint(mcp)
    with TestClient(mcp.streamable_http_app()) as client:
        yield client


def _plugins(total: int, healthy: int) -> MagicMock:
    names = ["compute", "storage", "network"][:total]
    pm = MagicMock()
    pm.registered_plugins = {n: object() for n in names}
    pm.healthy_plugins = {n: object() for n in names[:healthy]}
    return pm


@pytest.mark.parametrize(
    ("connected", "status_code", "status"),
    [
        (True, HTTPStatus.OK, "ok"),
        (False, HTTPStatus.SERVICE_UNAVAILABLE, "unhealthy"),
    ],
)
def test_health_reflects_connection(
    bare_server: VirtUIServer,
    health_api: TestClient,
    connected: bool,
    status_code: int,
    status: str,
) -> None:
    """Status follows the cluster connection, not plugin health."""
    bare_server._k8s_client = MagicMock(is_connected=connected)
    bare_server._plugin_manager = _plugins(total=3, healthy=2)

    response = health_api.get("/api/health")

    assert response.status_code == status_code
    assert response.json() == {
        "status": status,
        "connected": connected,
        "plugins": {"total": 3, "healthy": 2},
    }


def test_health_before_startup(health_api: TestClient) -> None:
    """Without a client or plugin manager the server reports unhealthy."""
    response = health_api.get("/api/health")

    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert response.json()["plugins"] == {"total": 0, "healthy": 0}


def test_unhealthy_plugins_still_ok(bare_server: VirtUIServer, health_api: TestClient) -> None:
    """A cluster without Kube-OVN still serves the other domains."""
    bare_server._k8s_client = MagicMock(is_connected=True)
    bare_server._plugin_manager = _plugins(total=3, healthy=0)

    response = health_api.get("/api/health")

    assert response.status_code == HTTPStatus.OK
    assert response.json()["plugins"]["healthy"] == 0
