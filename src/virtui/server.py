"""VirtUI server: the dashboard REST API and MCP tools on one HTTP app."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from http import HTTPStatus
from typing import Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from virtui.clients.base import K8sClient
from virtui.config import VirtUIConfig, get_config
from virtui.models.common import NamespaceInfo
from virtui.plugin_manager import PluginManager
from virtui.utils.http import respond

logger = logging.getLogger(__name__)


class VirtUIServer:
    """VirtUI server with plugin-provided routes and tools."""

    def __init__(self, config: VirtUIConfig | None = None) -> None:
        self._config = config or get_config()
        self._k8s_client: K8sClient | None = None
        self._mcp: FastMCP | None = None
        self._plugin_manager: PluginManager | None = None

    @property
    def config(self) -> VirtUIConfig:
        """Get server configuration."""
        return self._config

    @property
    def k8s(self) -> K8sClient:
        """Get the Kubernetes client.

        Raises:
            RuntimeError: If the server has not started.
        """
        if self._k8s_client is None:
            raise RuntimeError("Server not running. K8s client not available.")
        return self._k8s_client

    @property
    def mcp(self) -> FastMCP:
        """Get the MCP server instance.

        Raises:
            RuntimeError: If the server is not initialized.
        """
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager:
        """Get the plugin manager.

        Raises:
            RuntimeError: If the server is not initialized.
        """
        if self._plugin_manager is None:
            raise RuntimeError("Server not initialized.")
        return self._plugin_manager

    def startup(self) -> None:
        """Connect to the cluster and run plugin health checks.

        Safe to call more than once: an already-connected client is kept.
        """
        if self._k8s_client is None or not self._k8s_client.is_connected:
            self._k8s_client = K8sClient(self._config)
            self._k8s_client.connect()

        if self._plugin_manager is not None:
            self._plugin_manager.run_health_checks(self)
            logger.info(
                f"VirtUI server started with "
                f"{len(self._plugin_manager.healthy_plugins)}/"
                f"{len(self._plugin_manager.registered_plugins)} plugins active"
            )

    def shutdown(self) -> None:
        """Disconnect from the cluster."""
        if self._k8s_client is not None:
            self._k8s_client.disconnect()
        self._k8s_client = None
        logger.info("VirtUI server shut down")

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for MCP sessions.

        FastMCP enters it once per session, so it only ensures the cluster
        client is connected. The connection is closed by shutdown().
        """
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            server_self.startup()
            yield

        return lifespan

    def create_mcp(self) -> FastMCP:
        """Create the FastMCP instance and register every plugin's routes and tools."""
        self._plugin_manager = PluginManager()
        self._plugin_manager.load_core_plugins()
        self._plugin_manager.load_entrypoint_plugins()

        mcp = FastMCP(
            name="virtui",
            instructions="Operations dashboard for KubeVirt virtual machines, CDI and CSI "
            "storage, and Kube-OVN networking. Read-only tools list VMs, volumes, "
            "snapshots, VPCs, elastic IPs, NAT rules, load balancers and VIPs.",
            lifespan=self._create_lifespan(),
            host=self._config.host,
            port=self._config.port,
        )
        self._mcp = mcp

        self._register_health_endpoint(mcp)
        self._register_namespace_routes(mcp)
        self._plugin_manager.register_all_routes(mcp, self)
        self._plugin_manager.register_all_tools(mcp, self)
        self._register_core_resources(mcp)

        return mcp

    def _register_health_endpoint(self, mcp: FastMCP) -> None:
        """Register GET /api/health.

        Reports 200 once the cluster client is connected, 503 before that.
        """

        @mcp.custom_route("/api/health", methods=["GET"])
        async def health(_request: Request) -> Response:
            connected = self._k8s_client is not None and self._k8s_client.is_connected
            pm = self._plugin_manager
            total = len(pm.registered_plugins) if pm is not None else 0
            healthy = len(pm.healthy_plugins) if pm is not None else 0

            return JSONResponse(
                {
                    "status": "ok" if connected else "unhealthy",
                    "connected": connected,
                    "plugins": {"total": total, "healthy": healthy},
                },
                status_code=HTTPStatus.OK if connected else HTTPStatus.SERVICE_UNAVAILABLE,
            )

    def _register_namespace_routes(self, mcp: FastMCP) -> None:
        """Register GET /api/namespaces."""

        def list_namespaces() -> list[dict[str, Any]]:
            return [
                NamespaceInfo.from_resource(ns).to_response()
                for ns in self.k8s.list_namespaces()
            ]

        @mcp.custom_route("/api/namespaces", methods=["GET"])
        async def namespaces(_request: Request) -> Response:
            return await respond("get namespaces", list_namespaces)

    def _register_core_resources(self, mcp: FastMCP) -> None:
        """Register MCP resources describing the server itself."""

        @mcp.resource("virtui://cluster/plugins")
        def cluster_plugins() -> dict:
            """Get the loaded plugins with their CRD requirements and health."""
            pm = self.plugin_manager
            plugin_info = {}
            for meta in pm.get_all_metadata():
                plugin_info[meta.name] = {
                    "version": meta.version,
                    "description": meta.description,
                    "requires_crds": meta.requires_crds,
                    "healthy": meta.name in pm.healthy_plugins,
                }

            return {
                "total_plugins": len(pm.registered_plugins),
                "active_plugins": len(pm.healthy_plugins),
                "default_namespace": self._config.default_namespace,
                "read_only": self._config.read_only_mode,
                "plugins": plugin_info,
                "custom_resources": sorted(
                    {f"{crd.plural}.{crd.group}" for crd in pm.get_all_crd_definitions()}
                ),
            }

        logger.info("Registered core MCP resources")


# Global server instance
_server: VirtUIServer | None = None


def get_server() -> VirtUIServer:
    """Get the global server instance."""
    global _server
    if _server is None:
        _server = VirtUIServer()
    return _server


def create_server(config: VirtUIConfig | None = None) -> FastMCP:
    """Create the global server and return its configured FastMCP instance."""
    global _server
    _server = VirtUIServer(config)
    return _server.create_mcp()
