"""Network client operations for Kube-OVN resources and LoadBalancer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from virtui.domains.aggregation import list_or_empty
from virtui.domains.network.crds import NetworkCRDs
from virtui.domains.network.models import (
    DEFAULT_NAT_PROTOCOL,
    DEFAULT_PORT_PROTOCOL,
    LOAD_BALANCER_TYPE,
    VIP_ANNOTATION,
    DnatRule,
    DnatRuleCreate,
    ElasticIP,
    ElasticIPCreate,
    LoadBalancer,
    LoadBalancerCreate,
    NatRule,
    NatRuleKind,
    SnatRule,
    SnatRuleCreate,
    Vip,
    Vpc,
    VpcCreate,
)
from virtui.utils.fields import dig

if TYPE_CHECKING:
    from virtui.clients.base import CRDDefinition, K8sClient


NAT_RULE_CRDS: dict[NatRuleKind, CRDDefinition] = {
    NatRuleKind.SNAT: NetworkCRDs.IPTABLES_SNAT_RULE,
    NatRuleKind.DNAT: NetworkCRDs.IPTABLES_DNAT_RULE,
}


def _document(crd: CRDDefinition, name: str, spec: dict[str, Any]) -> dict[str, Any]:
    """Build a cluster-scoped Kube-OVN object."""
    return {
        "apiVersion": crd.api_version,
        "kind": crd.kind,
        "metadata": {"name": name},
        "spec": spec,
    }


class NetworkClient:
    """Client for VPC, EIP, NAT, VIP and LoadBalancer operations."""

    def __init__(self, k8s: K8sClient) -> None:
        self._k8s = k8s

    # -------------------------------------------------------------------------
    # VPC Operations
    # -------------------------------------------------------------------------

    def list_vpcs(self) -> list[dict[str, Any]]:
        """List VPCs with the names and count of their member subnets.

        The VPC list is required. The subnet list only enriches it: if it
        fails, every VPC reports no subnets.
        """
        vpcs = self._k8s.list_resources(NetworkCRDs.VPC)
        subnets = list_or_empty(self._k8s, NetworkCRDs.SUBNET)

        result = []
        for vpc in vpcs:
            vpc_name = dig(vpc, "metadata", "name")
            members = [s for s in subnets if dig(s, "spec", "vpc") == vpc_name]
            result.append(Vpc.from_resources(vpc, members).to_response())
        return result

    def create_vpc(self, request: VpcCreate) -> dict[str, Any]:
        """Create a VPC. No subnet is created with it."""
        spec = {
            "namespaces": request.namespaces or [],
            "enableExternal": bool(request.enable_external),
        }
        body = _document(NetworkCRDs.VPC, request.name, spec)
        return self._k8s.create(NetworkCRDs.VPC, body=body)

    def delete_vpc(self, name: str) -> None:
        """Delete a VPC."""
        self._k8s.delete(NetworkCRDs.VPC, name)

    # -------------------------------------------------------------------------
    # EIP Operations
    # -------------------------------------------------------------------------

    def list_eips(self) -> list[dict[str, Any]]:
        """List IptablesEIPs."""
        eips = self._k8s.list_resources(NetworkCRDs.IPTABLES_EIP)
        return [ElasticIP.from_resource(eip).to_response() for eip in eips]

    def create_eip(self, request: ElasticIPCreate) -> dict[str, Any]:
        """Create an IptablesEIP; blank addresses are left for the gateway to assign."""
        spec: dict[str, Any] = {"natGwDp": request.nat_gw}
        if request.v4ip:
            spec["v4ip"] = request.v4ip
        if request.v6ip:
            spec["v6ip"] = request.v6ip
        if request.qos_policy:
            spec["qosPolicy"] = request.qos_policy

        body = _document(NetworkCRDs.IPTABLES_EIP, request.name, spec)
        return self._k8s.create(NetworkCRDs.IPTABLES_EIP, body=body)

    def delete_eip(self, name: str) -> None:
        """Delete an IptablesEIP."""
        self._k8s.delete(NetworkCRDs.IPTABLES_EIP, name)

    # -------------------------------------------------------------------------
    # NAT Rule Operations
    # -------------------------------------------------------------------------

    def nat_rules(self) -> list[NatRule]:
        """Read SNAT then DNAT rules, each tagged with its kind.

        The two collections are read independently; a failed read
        contributes no rules.
        """
        snat = list_or_empty(self._k8s, NetworkCRDs.IPTABLES_SNAT_RULE)
        dnat = list_or_empty(self._k8s, NetworkCRDs.IPTABLES_DNAT_RULE)

        rules: list[NatRule] = [SnatRule.from_resource(r) for r in snat]
        rules.extend(DnatRule.from_resource(r) for r in dnat)
        return rules

    def list_nat_rules(self) -> list[dict[str, Any]]:
        """List SNAT and DNAT rules as one JSON-ready sequence."""
        return [rule.to_response() for rule in self.nat_rules()]

    def create_snat_rule(self, request: SnatRuleCreate) -> dict[str, Any]:
        """Create an IptablesSnatRule."""
        crd = NAT_RULE_CRDS[NatRuleKind.SNAT]
        spec = {
            "eip": request.eip,
            "internalCIDR": request.internal_cidr,
            "natGwDp": request.nat_gw,
        }
        return self._k8s.create(crd, body=_document(crd, request.name, spec))

    def create_dnat_rule(self, request: DnatRuleCreate) -> dict[str, Any]:
        """Create an IptablesDnatRule."""
        crd = NAT_RULE_CRDS[NatRuleKind.DNAT]
        # Kube-OVN declares both ports as strings
        spec = {
            "eip": request.eip,
            "externalPort": str(request.external_port),
            "internalIp": request.internal_ip,
            "internalPort": str(request.internal_port),
            "protocol": request.protocol or DEFAULT_NAT_PROTOCOL,
            "natGwDp": request.nat_gw,
        }
        return self._k8s.create(crd, body=_document(crd, request.name, spec))

    def delete_nat_rule(self, kind: NatRuleKind, name: str) -> None:
        """Delete a NAT rule from the collection named by kind.

        Args:
            kind: SNAT or DNAT. Only that collection is touched.
            name: The rule name.
        """
        self._k8s.delete(NAT_RULE_CRDS[NatRuleKind(kind)], name)

    # -------------------------------------------------------------------------
    # LoadBalancer Operations
    # -------------------------------------------------------------------------

    def list_load_balancers(self, namespace: str) -> list[dict[str, Any]]:
        """List Services of type LoadBalancer in a namespace."""
        services = self._k8s.list_resources(NetworkCRDs.SERVICE, namespace=namespace)
        return [
            LoadBalancer.from_resource(svc).to_response()
            for svc in services
            if dig(svc, "spec", "type") == LOAD_BALANCER_TYPE
        ]

    def create_load_balancer(
        self, namespace: str, request: LoadBalancerCreate
    ) -> dict[str, Any]:
        """Create a LoadBalancer Service, optionally pinned to a Kube-OVN VIP."""
        metadata: dict[str, Any] = {"name": request.name, "namespace": namespace}
        if request.vip:
            metadata["annotations"] = {VIP_ANNOTATION: request.vip}

        ports = [
            {
                "name": p.name or f"port-{p.port}",
                "port": p.port,
                "targetPort": p.target_port or p.port,
                "protocol": p.protocol or DEFAULT_PORT_PROTOCOL,
            }
            for p in request.ports
        ]

        body = {
            "apiVersion": NetworkCRDs.SERVICE.api_version,
            "kind": NetworkCRDs.SERVICE.kind,
            "metadata": metadata,
            "spec": {
                "type": LOAD_BALANCER_TYPE,
                "selector": request.selector or {},
                "ports": ports,
            },
        }
        return self._k8s.create(NetworkCRDs.SERVICE, body=body, namespace=namespace)

    def delete_load_balancer(self, namespace: str, name: str) -> None:
        """Delete a LoadBalancer Service."""
        self._k8s.delete(NetworkCRDs.SERVICE, name, namespace=namespace)

    # -------------------------------------------------------------------------
    # VIP Operations
    # -------------------------------------------------------------------------

    def list_vips(self) -> list[dict[str, Any]]:
        """List Kube-OVN VIPs."""
        vips = self._k8s.list_resources(NetworkCRDs.VIP)
        return [Vip.from_resource(vip).to_response() for vip in vips]
