"""Virtual machine client operations wrapping K8sClient."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from virtui.domains.aggregation import list_or_empty
from virtui.domains.compute.crds import ComputeCRDs
from virtui.domains.compute.models import (
    DEFAULT_CLOUD_INIT,
    DEFAULT_CPU_CORES,
    DEFAULT_DISK_SIZE,
    DEFAULT_IMAGE_URL,
    DEFAULT_MEMORY,
    VirtualMachine,
    VirtualMachineCreate,
)
from virtui.utils.fields import dig

if TYPE_CHECKING:
    from virtui.clients.base import K8sClient

logger = logging.getLogger(__name__)

DISK_BUS = "virtio"
ROOT_DISK = "rootdisk"
CLOUD_INIT_DISK = "cloudinitdisk"
POD_NETWORK = "default"


class ComputeClient:
    """Client for KubeVirt VirtualMachine operations."""

    def __init__(self, k8s: K8sClient) -> None:
        """Initialize with a K8sClient instance."""
        self._k8s = k8s

    def list_virtual_machines(self, namespace: str) -> list[dict[str, Any]]:
        """List VMs joined with their running instances.

        Both lists are best effort: if either call fails it is treated as
        empty, so a VM with no instance reports "Starting" or "Stopped".

        Args:
            namespace: The namespace to list VMs from.

        Returns:
            Flattened VM views.
        """
        vms = list_or_empty(self._k8s, ComputeCRDs.VIRTUAL_MACHINE, namespace)
        vmis = list_or_empty(self._k8s, ComputeCRDs.VIRTUAL_MACHINE_INSTANCE, namespace)

        instances: dict[str, dict[str, Any]] = {}
        for vmi in vmis:
            instances.setdefault(dig(vmi, "metadata", "name"), vmi)

        return [
            VirtualMachine.from_resources(vm, instances.get(dig(vm, "metadata", "name")))
            .to_response()
            for vm in vms
        ]

    def get_virtual_machine(self, namespace: str, name: str) -> dict[str, Any]:
        """Get the raw VirtualMachine document."""
        return self._k8s.get(ComputeCRDs.VIRTUAL_MACHINE, name, namespace=namespace)

    def create_virtual_machine(
        self, namespace: str, request: VirtualMachineCreate
    ) -> dict[str, Any]:
        """Create a VirtualMachine.

        Args:
            namespace: The namespace to create the VM in.
            request: Fields supplied by the operator.

        Returns:
            The created document as returned by the cluster.
        """
        body = self._build_virtual_machine(namespace, request)
        return self._k8s.create(ComputeCRDs.VIRTUAL_MACHINE, body=body, namespace=namespace)

    def delete_virtual_machine(self, namespace: str, name: str) -> None:
        """Delete a VM; the cluster removes its instance."""
        self._k8s.delete(ComputeCRDs.VIRTUAL_MACHINE, name, namespace=namespace)

    def start_virtual_machine(self, namespace: str, name: str) -> dict[str, Any]:
        """Set spec.running to true. Returns the patched document."""
        return self._set_running(namespace, name, True)

    def stop_virtual_machine(self, namespace: str, name: str) -> dict[str, Any]:
        """Set spec.running to false. Returns the patched document."""
        return self._set_running(namespace, name, False)

    def _set_running(self, namespace: str, name: str, running: bool) -> dict[str, Any]:
        body = {"spec": {"running": running}}
        return self._k8s.patch(ComputeCRDs.VIRTUAL_MACHINE, name, body=body, namespace=namespace)

    def _build_virtual_machine(
        self, namespace: str, request: VirtualMachineCreate
    ) -> dict[str, Any]:
        """Build the VirtualMachine body from a request."""
        user_data = request.cloud_init
        if not user_data:
            logger.warning(
                f"VM '{request.name}' uses the default cloud-init with a fixed password; "
                "pass cloudInit to set your own credentials"
            )
            user_data = DEFAULT_CLOUD_INIT

        spec: dict[str, Any] = {
            "running": bool(request.running),
            "template": {
                "metadata": {"labels": {"kubevirt.io/vm": request.name}},
                "spec": {
                    "domain": {
                        "cpu": {"cores": request.cpu or DEFAULT_CPU_CORES},
                        "devices": {
                            "disks": [
                                {"name": ROOT_DISK, "disk": {"bus": DISK_BUS}},
                                {"name": CLOUD_INIT_DISK, "disk": {"bus": DISK_BUS}},
                            ],
                            "interfaces": [{"name": POD_NETWORK, "masquerade": {}}],
                        },
                        "resources": {
                            "requests": {"memory": request.memory or DEFAULT_MEMORY},
                        },
                    },
                    "networks": [{"name": POD_NETWORK, "pod": {}}],
                    "volumes": [
                        {
                            "name": ROOT_DISK,
                            "dataVolume": {
                                "name": request.data_volume or request.root_volume_name,
                            },
                        },
                        {
                            "name": CLOUD_INIT_DISK,
                            "cloudInitNoCloud": {"userData": user_data},
                        },
                    ],
                },
            },
        }

        if request.create_data_volume:
            spec["dataVolumeTemplates"] = [
                {
                    "metadata": {"name": request.root_volume_name},
                    "spec": {
                        "source": {"http": {"url": request.image_url or DEFAULT_IMAGE_URL}},
                        "pvc": {
                            "accessModes": ["ReadWriteOnce"],
                            "resources": {
                                "requests": {"storage": request.disk_size or DEFAULT_DISK_SIZE},
                            },
                        },
                    },
                }
            ]

        return {
            "apiVersion": ComputeCRDs.VIRTUAL_MACHINE.api_version,
            "kind": ComputeCRDs.VIRTUAL_MACHINE.kind,
            "metadata": {"name": request.name, "namespace": namespace},
            "spec": spec,
        }
