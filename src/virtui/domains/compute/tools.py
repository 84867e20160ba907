"""MCP Tools for virtual machines."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from virtui.domains.compute.client import ComputeClient

if TYPE_CHECKING:
    from virtui.server import VirtUIServer


def register_tools(mcp: FastMCP, server: "VirtUIServer") -> None:
    """Register compute tools with the MCP server."""

    @mcp.tool()
    def list_virtual_machines(namespace: str | None = None) -> dict[str, Any]:
        """List KubeVirt virtual machines with their live status.

        Each VM reports its desired running state, the live phase of its
        instance (or "Starting"/"Stopped" when no instance exists), CPU,
        memory, IP address and node.

        Args:
            namespace: Namespace to list from (server default if omitted).

        Returns:
            The namespace, the VM views and their count.
        """
        ns = namespace or server.config.default_namespace
        items = ComputeClient(server.k8s).list_virtual_machines(ns)
        return {"namespace": ns, "items": items, "total": len(items)}

    @mcp.tool()
    def get_virtual_machine(name: str, namespace: str | None = None) -> dict[str, Any]:
        """Get the full VirtualMachine document.

        Args:
            name: The VM name.
            namespace: Namespace of the VM (server default if omitted).

        Returns:
            The VirtualMachine resource as stored in the cluster.
        """
        ns = namespace or server.config.default_namespace
        return ComputeClient(server.k8s).get_virtual_machine(ns, name)
