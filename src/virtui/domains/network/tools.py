"""MCP Tools for Kube-OVN networking."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from virtui.domains.network.client import NetworkClient

if TYPE_CHECKING:
    from virtui.server import VirtUIServer


def register_tools(mcp: FastMCP, server: "VirtUIServer") -> None:
    """Register network tools with the MCP server."""

    @mcp.tool()
    def list_vpcs() -> dict[str, Any]:
        """List Kube-OVN VPCs with their member subnets.

        Returns:
            The VPC views and their count.
        """
        items = NetworkClient(server.k8s).list_vpcs()
        return {"items": items, "total": len(items)}

    @mcp.tool()
    def list_elastic_ips() -> dict[str, Any]:
        """List iptables elastic IPs with their addresses and NAT gateway.

        Returns:
            The EIP views and their count.
        """
        items = NetworkClient(server.k8s).list_eips()
        return {"items": items, "total": len(items)}

    @mcp.tool()
    def list_nat_rules() -> dict[str, Any]:
        """List SNAT and DNAT rules. Each rule carries a 'type' of SNAT or DNAT.

        Returns:
            The rules, SNAT first, and counts per type.
        """
        items = NetworkClient(server.k8s).list_nat_rules()
        return {
            "items": items,
            "total": len(items),
            "snat": sum(1 for r in items if r["type"] == "SNAT"),
            "dnat": sum(1 for r in items if r["type"] == "DNAT"),
        }

    @mcp.tool()
    def list_load_balancers(namespace: str | None = None) -> dict[str, Any]:
        """List Services of type LoadBalancer.

        Args:
            namespace: Namespace to list from (server default if omitted).

        Returns:
            The namespace, the load balancer views and their count.
        """
        ns = namespace or server.config.default_namespace
        items = NetworkClient(server.k8s).list_load_balancers(ns)
        return {"namespace": ns, "items": items, "total": len(items)}

    @mcp.tool()
    def list_vips() -> dict[str, Any]:
        """List Kube-OVN VIPs and the subnet each address is reserved in."""
        items = NetworkClient(server.k8s).list_vips()
        return {"items": items, "total": len(items)}
