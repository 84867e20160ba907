"""REST routes for VPCs, EIPs, NAT rules, load balancers and VIPs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from virtui.domains.network.client import NetworkClient
from virtui.domains.network.models import (
    DnatRuleCreate,
    ElasticIPCreate,
    LoadBalancerCreate,
    NatRuleKind,
    SnatRuleCreate,
    VpcCreate,
)
from virtui.utils.http import check_operation, namespace_param, respond, respond_with_body

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.server import VirtUIServer


def register_routes(mcp: FastMCP, server: VirtUIServer) -> None:
    """Register network routes under /api/network."""

    def client() -> NetworkClient:
        return NetworkClient(server.k8s)

    # VPCs

    @mcp.custom_route("/api/network/vpcs", methods=["GET"])
    async def list_vpcs(request: Request) -> Response:
        return await respond("list VPCs", lambda: client().list_vpcs())

    @mcp.custom_route("/api/network/vpcs", methods=["POST"])
    async def create_vpc(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        return await respond_with_body(
            request, "create VPC", VpcCreate, lambda payload: client().create_vpc(payload)
        )

    @mcp.custom_route("/api/network/vpcs/{name}", methods=["DELETE"])
    async def delete_vpc(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        name = request.path_params["name"]
        return await respond("delete VPC", lambda: client().delete_vpc(name))

    # Elastic IPs

    @mcp.custom_route("/api/network/eips", methods=["GET"])
    async def list_eips(request: Request) -> Response:
        return await respond("list EIPs", lambda: client().list_eips())

    @mcp.custom_route("/api/network/eips", methods=["POST"])
    async def create_eip(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        return await respond_with_body(
            request, "create EIP", ElasticIPCreate, lambda payload: client().create_eip(payload)
        )

    @mcp.custom_route("/api/network/eips/{name}", methods=["DELETE"])
    async def delete_eip(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        name = request.path_params["name"]
        return await respond("delete EIP", lambda: client().delete_eip(name))

    # NAT rules

    @mcp.custom_route("/api/network/nat", methods=["GET"])
    async def list_nat_rules(request: Request) -> Response:
        return await respond("list NAT rules", lambda: client().list_nat_rules())

    @mcp.custom_route("/api/network/nat/snat", methods=["POST"])
    async def create_snat_rule(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        return await respond_with_body(
            request,
            "create SNAT rule",
            SnatRuleCreate,
            lambda payload: client().create_snat_rule(payload),
        )

    @mcp.custom_route("/api/network/nat/dnat", methods=["POST"])
    async def create_dnat_rule(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        return await respond_with_body(
            request,
            "create DNAT rule",
            DnatRuleCreate,
            lambda payload: client().create_dnat_rule(payload),
        )

    @mcp.custom_route("/api/network/nat/snat/{name}", methods=["DELETE"])
    async def delete_snat_rule(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        name = request.path_params["name"]
        return await respond(
            "delete SNAT rule", lambda: client().delete_nat_rule(NatRuleKind.SNAT, name)
        )

    @mcp.custom_route("/api/network/nat/dnat/{name}", methods=["DELETE"])
    async def delete_dnat_rule(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        name = request.path_params["name"]
        return await respond(
            "delete DNAT rule", lambda: client().delete_nat_rule(NatRuleKind.DNAT, name)
        )

    # Load balancers

    @mcp.custom_route("/api/network/loadbalancers", methods=["GET"])
    async def list_load_balancers(request: Request) -> Response:
        ns = namespace_param(request, server.config.default_namespace)
        return await respond("list LoadBalancers", lambda: client().list_load_balancers(ns))

    @mcp.custom_route("/api/network/loadbalancers", methods=["POST"])
    async def create_load_balancer(request: Request) -> Response:
        denied = check_operation(server.config, "create")
        if denied is not None:
            return denied
        ns = namespace_param(request, server.config.default_namespace)
        return await respond_with_body(
            request,
            "create LoadBalancer",
            LoadBalancerCreate,
            lambda payload: client().create_load_balancer(ns, payload),
        )

    @mcp.custom_route("/api/network/loadbalancers/{name}", methods=["DELETE"])
    async def delete_load_balancer(request: Request) -> Response:
        denied = check_operation(server.config, "delete")
        if denied is not None:
            return denied
        ns = namespace_param(request, server.config.default_namespace)
        name = request.path_params["name"]
        return await respond(
            "delete LoadBalancer", lambda: client().delete_load_balancer(ns, name)
        )

    # VIPs

    @mcp.custom_route("/api/network/vips", methods=["GET"])
    async def list_vips(request: Request) -> Response:
        return await respond("list VIPs", lambda: client().list_vips())
