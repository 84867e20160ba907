"""CRD definitions for KubeVirt resources."""

from virtui.clients.base import CRDDefinition


class ComputeCRDs:
    """KubeVirt CRD definitions."""

    VIRTUAL_MACHINE = CRDDefinition(
        group="kubevirt.io",
        version="v1",
        plural="virtualmachines",
        kind="VirtualMachine",
    )

    VIRTUAL_MACHINE_INSTANCE = CRDDefinition(
        group="kubevirt.io",
        version="v1",
        plural="virtualmachineinstances",
        kind="VirtualMachineInstance",
    )

    @classmethod
    def all_crds(cls) -> list[CRDDefinition]:
        """Return all CRD definitions."""
        return [cls.VIRTUAL_MACHINE, cls.VIRTUAL_MACHINE_INSTANCE]
