"""Hook specifications for VirtUI plugins.

Each domain (compute, storage, network) is a plugin that implements these
hooks. External packages can add plugins through the ``virtui.plugins``
entry point group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.clients.base import CRDDefinition
    from virtui.plugin import PluginMetadata
    from virtui.server import VirtUIServer

PROJECT_NAME = "virtui"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class VirtUIHookSpec:
    """Hooks a VirtUI plugin may implement."""

    @hookspec
    def virtui_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return the plugin's metadata."""

    @hookspec
    def virtui_register_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        """Register REST routes on the server's HTTP app.

        Args:
            mcp: The FastMCP instance whose custom routes serve the dashboard API.
            server: The VirtUI server, for its config and cluster client.
        """

    @hookspec
    def virtui_register_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        """Register MCP tools.

        Args:
            mcp: The FastMCP instance to register tools with.
            server: The VirtUI server, for its config and cluster client.
        """

    @hookspec
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:  # type: ignore[empty-body]
        """Return the custom resources this plugin reads or writes."""

    @hookspec
    def virtui_health_check(self, server: VirtUIServer) -> tuple[bool, str]:  # type: ignore[empty-body]
        """Check whether the plugin can work against the connected cluster.

        Returns:
            Tuple of (healthy, message).
        """
