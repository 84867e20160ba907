"""Pydantic models for virtual machines."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from virtui.models.common import PLACEHOLDER, NamespacedView
from virtui.utils.fields import dig

DEFAULT_CPU_CORES = 1
DEFAULT_MEMORY = "1Gi"
DEFAULT_DISK_SIZE = "10Gi"
DEFAULT_IMAGE_URL = (
    "https://cloud-images.ubuntu.com/jammy/current/jammy-server-cloudimg-amd64.img"
)

# Known-insecure: sets a fixed, public login password. A warning is logged
# every time a VM is created with it.
DEFAULT_CLOUD_INIT = "#cloud-config\npassword: changeme\nchpasswd: { expire: False }"


class VirtualMachineStatus(str, Enum):
    """Status reported when no VirtualMachineInstance exists yet."""

    STARTING = "Starting"
    STOPPED = "Stopped"


class VirtualMachine(NamespacedView):
    """A VirtualMachine joined with its VirtualMachineInstance, if any."""

    running: bool = Field(False, description="Desired running state")
    status: str = Field(..., description="Live phase, or inferred from the desired state")
    cpu: int = Field(DEFAULT_CPU_CORES, description="CPU cores")
    memory: str = Field(DEFAULT_MEMORY, description="Memory request")
    ip_address: str = Field(PLACEHOLDER, alias="ipAddress", description="First interface IP")
    node_name: str = Field(PLACEHOLDER, alias="nodeName", description="Node hosting the instance")

    @classmethod
    def from_resources(
        cls, vm: dict[str, Any], vmi: dict[str, Any] | None = None
    ) -> "VirtualMachine":
        """Create from a VirtualMachine and its optional live instance."""
        running = bool(dig(vm, "spec", "running"))
        domain = dig(vm, "spec", "template", "spec", "domain")

        status = dig(vmi, "status", "phase")
        if not status:
            status = (
                VirtualMachineStatus.STARTING.value
                if running
                else VirtualMachineStatus.STOPPED.value
            )

        return cls(
            **cls.metadata_fields(vm),
            running=running,
            status=status,
            cpu=dig(domain, "cpu", "cores") or DEFAULT_CPU_CORES,
            memory=str(dig(domain, "resources", "requests", "memory") or DEFAULT_MEMORY),
            ip_address=dig(vmi, "status", "interfaces", 0, "ipAddress") or PLACEHOLDER,
            node_name=dig(vmi, "status", "nodeName") or PLACEHOLDER,
        )


class VirtualMachineCreate(BaseModel):
    """Request model for creating a virtual machine."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="VM name")
    cpu: int | None = Field(None, ge=0, description="CPU cores")
    memory: str | None = Field(None, description="Memory request (e.g., '4Gi')")
    disk_size: str | None = Field(None, alias="diskSize", description="Root disk size")
    image_url: str | None = Field(None, alias="imageUrl", description="Root disk image URL")
    cloud_init: str | None = Field(None, alias="cloudInit", description="cloud-init user data")
    data_volume: str | None = Field(
        None, alias="dataVolume", description="Existing DataVolume to boot from"
    )
    create_data_volume: bool | None = Field(
        None,
        alias="createDataVolume",
        description="Import the root disk from imageUrl via a DataVolume template",
    )
    running: bool | None = Field(None, description="Start the VM immediately")

    @property
    def root_volume_name(self) -> str:
        """Name of the DataVolume the root disk is imported into."""
        return f"{self.name}-rootdisk"
