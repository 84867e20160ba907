"""REST routes for virtual machines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from virtui.domains.compute.client import ComputeClient
from virtui.domains.compute.models import VirtualMachineCreate
from virtui.utils.http import check_operation, namespace_param, respond, respond_with_body

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.server import VirtUIServer


def register_routes(mcp: FastMCP, server: VirtUIServer) -> None:
    """Register compute routes under /api/compute."""

    def client() -> ComputeClient:
        return ComputeClient(server.k8s)

    def namespace(request: Request) -> str:
        return namespace_param(request, server.config.default_namespace)

    @mcp.custom_route("/api/compute/vms", methods=["GET"])
    async def list_vms(request: Request) -> Response:
        ns = namespace(request)
        return await respond("list VMs", lambda: client().list_virtual_machines(ns))

    @mcp.custom_route("/api/compute/vms/{name}", methods=["GET"])
    async def get_vm(request: Request) -> Response:
        ns, name = namespace(request), request.path_params["name"]
        return await respond("get VM", lambda: client().get_virtual_machine(ns, name))

    @mcp.custom_route("/api/compute/vms", methods=["POST"])
    async def create_vm(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        ns = namespace(request)
        return await respond_with_body(
            request,
            "create VM",
            VirtualMachineCreate,
            lambda payload: client().create_virtual_machine(ns, payload),
        )

    @mcp.custom_route("/api/compute/vms/{name}", methods=["DELETE"])
    async def delete_vm(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("delete VM", lambda: client().delete_virtual_machine(ns, name))

    @mcp.custom_route("/api/compute/vms/{name}/start", methods=["POST"])
    async def start_vm(request: Request) -> Response:
        denied = check_operation(server.config, "patch")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("start VM", lambda: client().start_virtual_machine(ns, name))

    @mcp.custom_route("/api/compute/vms/{name}/stop", methods=["POST"])
    async def stop_vm(request: Request) -> Response:
        denied = check_operation(server.config, "patch")
        if denied is not None:
            return denied
        ns, name = namespace(request), request.path_params["name"]
        return await respond("stop VM", lambda: client().stop_virtual_machine(ns, name))
