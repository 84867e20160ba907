"""MCP Tools for storage."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from virtui.domains.storage.client import StorageClient

if TYPE_CHECKING:
    from virtui.server import VirtUIServer


def register_tools(mcp: FastMCP, server: "VirtUIServer") -> None:
    """Register storage tools with the MCP server."""

    @mcp.tool()
    def list_block_volumes(namespace: str | None = None) -> dict[str, Any]:
        """List CDI DataVolumes with import phase, progress, size and source kind.

        Args:
            namespace: Namespace to list from (server default if omitted).

        Returns:
            The namespace, the DataVolume views and their count.
        """
        ns = namespace or server.config.default_namespace
        items = StorageClient(server.k8s).list_block_volumes(ns)
        return {"namespace": ns, "items": items, "total": len(items)}

    @mcp.tool()
    def list_volume_snapshots(namespace: str | None = None) -> dict[str, Any]:
        """List VolumeSnapshots with readiness, source PVC and restore size.

        Args:
            namespace: Namespace to list from (server default if omitted).

        Returns:
            The namespace, the snapshot views and their count.
        """
        ns = namespace or server.config.default_namespace
        items = StorageClient(server.k8s).list_snapshots(ns)
        return {"namespace": ns, "items": items, "total": len(items)}

    @mcp.tool()
    def list_filesystems(namespace: str | None = None) -> dict[str, Any]:
        """List PersistentVolumeClaims with phase, size, access modes and class.

        Args:
            namespace: Namespace to list from (server default if omitted).

        Returns:
            The namespace, the PVC views and their count.
        """
        ns = namespace or server.config.default_namespace
        items = StorageClient(server.k8s).list_filesystems(ns)
        return {"namespace": ns, "items": items, "total": len(items)}
