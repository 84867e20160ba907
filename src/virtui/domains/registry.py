"""Plugin registry for the core VirtUI domains.

Each domain is wrapped in a plugin class so that routes, tools and CRD
requirements reach the server through the same pluggy hooks external
plugins use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from virtui.domains.compute.crds import ComputeCRDs
from virtui.domains.network.crds import NetworkCRDs
from virtui.domains.storage.crds import StorageCRDs
from virtui.hooks import hookimpl
from virtui.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.clients.base import CRDDefinition
    from virtui.server import VirtUIServer

MAINTAINER = "virtui-maintainers"


class ComputePlugin(BasePlugin):
    """Plugin for KubeVirt virtual machines."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="compute",
                version="1.0.0",
                description="KubeVirt virtual machine listing and lifecycle",
                maintainer=MAINTAINER,
                requires_crds=[
                    ComputeCRDs.VIRTUAL_MACHINE.kind,
                    ComputeCRDs.VIRTUAL_MACHINE_INSTANCE.kind,
                ],
            )
        )

    @hookimpl
    def virtui_register_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.compute.routes import register_routes

        register_routes(mcp, server)

    @hookimpl
    def virtui_register_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.compute.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:
        return ComputeCRDs.all_crds()


class StoragePlugin(BasePlugin):
    """Plugin for CDI DataVolumes, CSI snapshots and PVCs."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="storage",
                version="1.0.0",
                description="Block volumes, volume snapshots and filesystems",
                maintainer=MAINTAINER,
                requires_crds=[
                    StorageCRDs.DATA_VOLUME.kind,
                    StorageCRDs.VOLUME_SNAPSHOT.kind,
                ],
            )
        )

    @hookimpl
    def virtui_register_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.storage.routes import register_routes

        register_routes(mcp, server)

    @hookimpl
    def virtui_register_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.storage.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:
        return StorageCRDs.all_crds()


class NetworkPlugin(BasePlugin):
    """Plugin for Kube-OVN networking and LoadBalancer services."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="network",
                version="1.0.0",
                description="Kube-OVN VPCs, elastic IPs, NAT rules, VIPs and load balancers",
                maintainer=MAINTAINER,
                requires_crds=[crd.kind for crd in NetworkCRDs.all_crds()],
            )
        )

    @hookimpl
    def virtui_register_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.network.routes import register_routes

        register_routes(mcp, server)

    @hookimpl
    def virtui_register_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        from virtui.domains.network.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:
        return NetworkCRDs.all_crds()


def get_core_plugins() -> list[BasePlugin]:
    """Return instances of all core domain plugins."""
    return [
        ComputePlugin(),
        StoragePlugin(),
        NetworkPlugin(),
    ]
