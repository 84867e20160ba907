"""CRD definitions for Kube-OVN resources."""

from virtui.clients.base import CoreResources, CRDDefinition


class NetworkCRDs:
    """Kube-OVN CRD definitions. All are cluster-scoped."""

    VPC = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="vpcs",
        kind="Vpc",
        namespaced=False,
    )

    SUBNET = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="subnets",
        kind="Subnet",
        namespaced=False,
    )

    IPTABLES_EIP = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="iptables-eips",
        kind="IptablesEIP",
        namespaced=False,
    )

    IPTABLES_SNAT_RULE = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="iptables-snat-rules",
        kind="IptablesSnatRule",
        namespaced=False,
    )

    IPTABLES_DNAT_RULE = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="iptables-dnat-rules",
        kind="IptablesDnatRule",
        namespaced=False,
    )

    VIP = CRDDefinition(
        group="kubeovn.io",
        version="v1",
        plural="vips",
        kind="Vip",
        namespaced=False,
    )

    SERVICE = CoreResources.SERVICE

    @classmethod
    def all_crds(cls) -> list[CRDDefinition]:
        """Return the custom resource definitions (core types excluded)."""
        return [
            cls.VPC,
            cls.SUBNET,
            cls.IPTABLES_EIP,
            cls.IPTABLES_SNAT_RULE,
            cls.IPTABLES_DNAT_RULE,
            cls.VIP,
        ]
