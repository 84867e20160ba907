"""REST routes for block storage, snapshots and filesystems."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from virtui.domains.storage.client import StorageClient
from virtui.domains.storage.models import BlockVolumeCreate, FilesystemCreate, VolumeSnapshotCreate
from virtui.utils.http import check_operation, namespace_param, respond, respond_with_body

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.server import VirtUIServer


def register_routes(mcp: FastMCP, server: VirtUIServer) -> None:
    """Register storage routes under /api/storage."""

    def client() -> StorageClient:
        return StorageClient(server.k8s)

    def namespace(request: Request) -> str:
        return namespace_param(request, server.config.default_namespace)

    # DataVolumes (block storage)

    @mcp.custom_route("/api/storage/datavolumes", methods=["GET"])
    async def list_datavolumes(request: Request) -> Response:
        ns = namespace(request)
        return await respond("list DataVolumes", lambda: client().list_block_volumes(ns))

    @mcp.custom_route("/api/storage/datavolumes", methods=["POST"])
    async def create_datavolume(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        ns = namespace(request)
        return await respond_with_body(
            request,
            "create DataVolume",
            BlockVolumeCreate,
            lambda payload: client().create_block_volume(ns, payload),
        )

    @mcp.custom_route("/api/storage/datavolumes/{name}", methods=["DELETE"])
    async def delete_datavolume(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("delete DataVolume", lambda: client().delete_block_volume(ns, name))

    # VolumeSnapshots

    @mcp.custom_route("/api/storage/snapshots", methods=["GET"])
    async def list_snapshots(request: Request) -> Response:
        ns = namespace(request)
        return await respond("list VolumeSnapshots", lambda: client().list_snapshots(ns))

    @mcp.custom_route("/api/storage/snapshots", methods=["POST"])
    async def create_snapshot(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        ns = namespace(request)
        return await respond_with_body(
            request,
            "create VolumeSnapshot",
            VolumeSnapshotCreate,
            lambda payload: client().create_snapshot(ns, payload),
        )

    @mcp.custom_route("/api/storage/snapshots/{name}", methods=["DELETE"])
    async def delete_snapshot(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("delete VolumeSnapshot", lambda: client().delete_snapshot(ns, name))

    # PVCs (filesystems)

    @mcp.custom_route("/api/storage/filesystems", methods=["GET"])
    async def list_filesystems(request: Request) -> Response:
        ns = namespace(request)
        return await respond("list PVCs", lambda: client().list_filesystems(ns))

    @mcp.custom_route("/api/storage/filesystems", methods=["POST"])
    async def create_filesystem(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        ns = namespace(request)
        return await respond_with_body(
            request,
            "create PVC",
            FilesystemCreate,
            lambda payload: client().create_filesystem(ns, payload),
        )

    @mcp.custom_route("/api/storage/filesystems/{name}", methods=["DELETE"])
    async def delete_filesystem(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("delete PVC", lambda: client().delete_filesystem(ns, name))
