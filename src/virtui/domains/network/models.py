"""Pydantic models for Kube-OVN networking and LoadBalancer services."""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from virtui.models.common import PLACEHOLDER, NamespacedView, ResourceView
from virtui.utils.fields import dig, join_or_placeholder

DEFAULT_NAT_PROTOCOL = "tcp"
DEFAULT_PORT_PROTOCOL = "TCP"
LOAD_BALANCER_TYPE = "LoadBalancer"
VIP_ANNOTATION = "ovn.kubernetes.io/vip"


class ReadyStatus(str, Enum):
    """Status derived from a Kube-OVN status.ready flag."""

    READY = "Ready"
    PENDING = "Pending"

    @classmethod
    def from_resource(cls, obj: dict[str, Any]) -> "ReadyStatus":
        """Read status.ready."""
        return cls.READY if dig(obj, "status", "ready") else cls.PENDING


class VpcStatus(str, Enum):
    """VPC status values."""

    ACTIVE = "Active"
    STANDBY = "Standby"


class NatRuleKind(str, Enum):
    """Which collection a NAT rule lives in.

    Kube-OVN keeps SNAT and DNAT rules in separate resource types, so the
    kind is not stored on the object. It is assigned when a rule is read and
    must be supplied on every write.
    """

    SNAT = "SNAT"
    DNAT = "DNAT"


# -----------------------------------------------------------------------------
# VPCs
# -----------------------------------------------------------------------------


class Vpc(ResourceView):
    """VPC joined with the subnets that reference it."""

    status: VpcStatus = Field(VpcStatus.ACTIVE, description="Standby or Active")
    default_subnet: str = Field(PLACEHOLDER, alias="defaultSubnet")
    subnets: list[str] = Field(default_factory=list, description="Member subnet names")
    subnet_count: int = Field(0, alias="subnetCount")
    enable_external: bool = Field(False, alias="enableExternal")

    @classmethod
    def from_resources(cls, vpc: dict[str, Any], subnets: list[dict[str, Any]]) -> "Vpc":
        """Create from a Vpc and the subnets whose spec.vpc names it."""
        names = [dig(s, "metadata", "name") for s in subnets]
        return cls(
            **cls.metadata_fields(vpc),
            status=VpcStatus.STANDBY if dig(vpc, "status", "standby") else VpcStatus.ACTIVE,
            default_subnet=dig(vpc, "spec", "defaultSubnet") or PLACEHOLDER,
            subnets=names,
            subnet_count=len(names),
            enable_external=bool(dig(vpc, "spec", "enableExternal")),
        )


class VpcCreate(BaseModel):
    """Request model for creating a VPC."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="VPC name")
    namespaces: list[str] | None = Field(None, description="Namespaces bound to the VPC")
    enable_external: bool | None = Field(None, alias="enableExternal")


# -----------------------------------------------------------------------------
# Elastic IPs
# -----------------------------------------------------------------------------


class ElasticIP(ResourceView):
    """IptablesEIP representation."""

    status: ReadyStatus = Field(ReadyStatus.PENDING)
    ip: str = Field(PLACEHOLDER, description="Assigned IPv4 address")
    v6ip: str = Field(PLACEHOLDER, description="Assigned IPv6 address")
    nat_gw: str = Field(PLACEHOLDER, alias="natGw", description="Owning NAT gateway")
    qos_policy: str = Field(PLACEHOLDER, alias="qosPolicy")

    @classmethod
    def from_resource(cls, eip: dict[str, Any]) -> "ElasticIP":
        """Create from an IptablesEIP; observed addresses win over requested ones."""
        return cls(
            **cls.metadata_fields(eip),
            status=ReadyStatus.from_resource(eip),
            ip=dig(eip, "status", "ip") or dig(eip, "spec", "v4ip") or PLACEHOLDER,
            v6ip=dig(eip, "status", "v6ip") or dig(eip, "spec", "v6ip") or PLACEHOLDER,
            nat_gw=dig(eip, "spec", "natGwDp") or PLACEHOLDER,
            qos_policy=dig(eip, "spec", "qosPolicy") or PLACEHOLDER,
        )


class ElasticIPCreate(BaseModel):
    """Request model for creating an IptablesEIP.

    Blank addresses mean "auto-assign" and are left out of the document.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="EIP name")
    nat_gw: str = Field(..., min_length=1, alias="natGw", description="NAT gateway name")
    v4ip: str | None = Field(None, description="Requested IPv4 address")
    v6ip: str | None = Field(None, description="Requested IPv6 address")
    qos_policy: str | None = Field(None, alias="qosPolicy")


# -----------------------------------------------------------------------------
# NAT rules
# -----------------------------------------------------------------------------


class SnatRule(ResourceView):
    """IptablesSnatRule representation."""

    type: Literal["SNAT"] = "SNAT"
    status: ReadyStatus = Field(ReadyStatus.PENDING)
    eip: str = Field(PLACEHOLDER, description="Bound EIP")
    internal_cidr: str = Field(PLACEHOLDER, alias="internalCidr")
    nat_gw: str = Field(PLACEHOLDER, alias="natGw")

    @classmethod
    def from_resource(cls, rule: dict[str, Any]) -> "SnatRule":
        """Create from an IptablesSnatRule."""
        return cls(
            **cls.metadata_fields(rule),
            status=ReadyStatus.from_resource(rule),
            eip=dig(rule, "spec", "eip") or PLACEHOLDER,
            internal_cidr=dig(rule, "spec", "internalCIDR") or PLACEHOLDER,
            nat_gw=dig(rule, "spec", "natGwDp") or PLACEHOLDER,
        )


class DnatRule(ResourceView):
    """IptablesDnatRule representation."""

    type: Literal["DNAT"] = "DNAT"
    status: ReadyStatus = Field(ReadyStatus.PENDING)
    eip: str = Field(PLACEHOLDER, description="Bound EIP")
    external_port: str = Field(PLACEHOLDER, alias="externalPort")
    internal_ip: str = Field(PLACEHOLDER, alias="internalIp")
    internal_port: str = Field(PLACEHOLDER, alias="internalPort")
    protocol: str = Field(DEFAULT_NAT_PROTOCOL)
    nat_gw: str = Field(PLACEHOLDER, alias="natGw")

    @classmethod
    def from_resource(cls, rule: dict[str, Any]) -> "DnatRule":
        """Create from an IptablesDnatRule."""
        return cls(
            **cls.metadata_fields(rule),
            status=ReadyStatus.from_resource(rule),
            eip=dig(rule, "spec", "eip") or PLACEHOLDER,
            external_port=str(dig(rule, "spec", "externalPort") or PLACEHOLDER),
            internal_ip=dig(rule, "spec", "internalIp") or PLACEHOLDER,
            internal_port=str(dig(rule, "spec", "internalPort") or PLACEHOLDER),
            protocol=dig(rule, "spec", "protocol") or DEFAULT_NAT_PROTOCOL,
            nat_gw=dig(rule, "spec", "natGwDp") or PLACEHOLDER,
        )


NatRule = Annotated[Union[SnatRule, DnatRule], Field(discriminator="type")]


class SnatRuleCreate(BaseModel):
    """Request model for creating an SNAT rule."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Rule name")
    eip: str = Field(..., min_length=1, description="EIP to translate to")
    internal_cidr: str = Field(..., min_length=1, alias="internalCidr")
    nat_gw: str = Field(..., min_length=1, alias="natGw")


class DnatRuleCreate(BaseModel):
    """Request model for creating a DNAT rule."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Rule name")
    eip: str = Field(..., min_length=1, description="EIP receiving traffic")
    external_port: str | int = Field(..., alias="externalPort")
    internal_ip: str = Field(..., min_length=1, alias="internalIp")
    internal_port: str | int = Field(..., alias="internalPort")
    protocol: str | None = Field(None, description="tcp or udp")
    nat_gw: str = Field(..., min_length=1, alias="natGw")


# -----------------------------------------------------------------------------
# Load balancers and VIPs
# -----------------------------------------------------------------------------


class LoadBalancer(NamespacedView):
    """Service of type LoadBalancer."""

    type: str | None = Field(None, description="Service type")
    cluster_ip: str = Field(PLACEHOLDER, alias="clusterIP")
    external_ip: str = Field(PLACEHOLDER, alias="externalIP")
    ports: str = Field(PLACEHOLDER, description="port:targetPort/protocol list")
    selector: str = Field(PLACEHOLDER, description="key=value list")

    @classmethod
    def from_resource(cls, svc: dict[str, Any]) -> "LoadBalancer":
        """Create from a Service. The external address comes from its ingress status only."""
        ports = [
            f"{p.get('port')}:{p.get('targetPort', p.get('port'))}/{p.get('protocol')}"
            for p in dig(svc, "spec", "ports") or []
        ]
        selector = dig(svc, "spec", "selector") or {}

        return cls(
            **cls.metadata_fields(svc),
            type=dig(svc, "spec", "type"),
            cluster_ip=dig(svc, "spec", "clusterIP") or PLACEHOLDER,
            external_ip=dig(svc, "status", "loadBalancer", "ingress", 0, "ip") or PLACEHOLDER,
            ports=join_or_placeholder(ports),
            selector=join_or_placeholder(f"{k}={v}" for k, v in selector.items()),
        )


class LoadBalancerPort(BaseModel):
    """One port of a LoadBalancer request."""

    model_config = ConfigDict(populate_by_name=True)

    port: int = Field(..., ge=1, le=65535)
    name: str | None = Field(None, description="Port name (default port-<port>)")
    target_port: int | str | None = Field(None, alias="targetPort")
    protocol: str | None = Field(None, description="TCP, UDP or SCTP")


class LoadBalancerCreate(BaseModel):
    """Request model for creating a LoadBalancer service."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Service name")
    vip: str | None = Field(None, description="Kube-OVN VIP to request")
    selector: dict[str, str] | None = Field(None, description="Pod selector labels")
    ports: list[LoadBalancerPort] = Field(default_factory=list)


class Vip(ResourceView):
    """Kube-OVN Vip representation."""

    status: ReadyStatus = Field(ReadyStatus.PENDING)
    subnet: str = Field(PLACEHOLDER, description="Subnet the address is reserved in")
    v4ip: str = Field(PLACEHOLDER)
    v6ip: str = Field(PLACEHOLDER)

    @classmethod
    def from_resource(cls, vip: dict[str, Any]) -> "Vip":
        """Create from a Vip."""
        return cls(
            **cls.metadata_fields(vip),
            status=ReadyStatus.from_resource(vip),
            subnet=dig(vip, "spec", "subnet") or PLACEHOLDER,
            v4ip=dig(vip, "status", "v4ip") or dig(vip, "spec", "v4ip") or PLACEHOLDER,
            v6ip=dig(vip, "status", "v6ip") or dig(vip, "spec", "v6ip") or PLACEHOLDER,
        )
