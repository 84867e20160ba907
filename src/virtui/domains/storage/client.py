"""Storage client operations: DataVolumes, VolumeSnapshots and PVCs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from virtui.domains.storage.crds import StorageCRDs
from virtui.domains.storage.models import (
    DEFAULT_SIZE,
    BlockVolume,
    BlockVolumeCreate,
    DataVolumeSourceType,
    Filesystem,
    FilesystemCreate,
    StorageAccessMode,
    VolumeSnapshot,
    VolumeSnapshotCreate,
)

if TYPE_CHECKING:
    from virtui.clients.base import K8sClient


def _claim_spec(
    access_mode: StorageAccessMode | None,
    size: str | None,
    storage_class: str | None,
) -> dict[str, Any]:
    """Build a PVC spec; storageClassName is left out when not chosen."""
    spec: dict[str, Any] = {
        "accessModes": [(access_mode or StorageAccessMode.READ_WRITE_ONCE).value],
        "resources": {"requests": {"storage": size or DEFAULT_SIZE}},
    }
    if storage_class:
        spec["storageClassName"] = storage_class
    return spec


class StorageClient:
    """Client for block, snapshot and filesystem storage operations."""

    def __init__(self, k8s: K8sClient) -> None:
        self._k8s = k8s

    # -------------------------------------------------------------------------
    # DataVolume Operations
    # -------------------------------------------------------------------------

    def list_block_volumes(self, namespace: str) -> list[dict[str, Any]]:
        """List all DataVolumes in a namespace."""
        dvs = self._k8s.list_resources(StorageCRDs.DATA_VOLUME, namespace=namespace)
        return [BlockVolume.from_resource(dv).to_response() for dv in dvs]

    def create_block_volume(self, namespace: str, request: BlockVolumeCreate) -> dict[str, Any]:
        """Create a DataVolume populated from a URL, blank, or a cloned PVC."""
        source: dict[str, Any]
        if request.source_kind == DataVolumeSourceType.HTTP:
            source = {"http": {"url": request.source_url}}
        elif request.source_kind == DataVolumeSourceType.BLANK:
            source = {"blank": {}}
        else:
            source = {
                "pvc": {
                    "name": request.source_pvc,
                    "namespace": request.source_pvc_namespace or namespace,
                }
            }

        body = {
            "apiVersion": StorageCRDs.DATA_VOLUME.api_version,
            "kind": StorageCRDs.DATA_VOLUME.kind,
            "metadata": {"name": request.name, "namespace": namespace},
            "spec": {
                "source": source,
                "pvc": _claim_spec(request.access_mode, request.size, request.storage_class),
            },
        }
        return self._k8s.create(StorageCRDs.DATA_VOLUME, body=body, namespace=namespace)

    def delete_block_volume(self, namespace: str, name: str) -> None:
        """Delete a DataVolume."""
        self._k8s.delete(StorageCRDs.DATA_VOLUME, name, namespace=namespace)

    # -------------------------------------------------------------------------
    # VolumeSnapshot Operations
    # -------------------------------------------------------------------------

    def list_snapshots(self, namespace: str) -> list[dict[str, Any]]:
        """List all VolumeSnapshots in a namespace."""
        snapshots = self._k8s.list_resources(StorageCRDs.VOLUME_SNAPSHOT, namespace=namespace)
        return [VolumeSnapshot.from_resource(s).to_response() for s in snapshots]

    def create_snapshot(self, namespace: str, request: VolumeSnapshotCreate) -> dict[str, Any]:
        """Snapshot a PVC.

        Without a snapshot class the key is omitted so the cluster default applies.
        """
        spec: dict[str, Any] = {
            "source": {"persistentVolumeClaimName": request.source_pvc},
        }
        if request.snapshot_class:
            spec["volumeSnapshotClassName"] = request.snapshot_class

        body = {
            "apiVersion": StorageCRDs.VOLUME_SNAPSHOT.api_version,
            "kind": StorageCRDs.VOLUME_SNAPSHOT.kind,
            "metadata": {"name": request.name, "namespace": namespace},
            "spec": spec,
        }
        return self._k8s.create(StorageCRDs.VOLUME_SNAPSHOT, body=body, namespace=namespace)

    def delete_snapshot(self, namespace: str, name: str) -> None:
        """Delete a VolumeSnapshot."""
        self._k8s.delete(StorageCRDs.VOLUME_SNAPSHOT, name, namespace=namespace)

    # -------------------------------------------------------------------------
    # PVC Operations
    # -------------------------------------------------------------------------

    def list_filesystems(self, namespace: str) -> list[dict[str, Any]]:
        """List all PVCs in a namespace."""
        pvcs = self._k8s.list_resources(StorageCRDs.PERSISTENT_VOLUME_CLAIM, namespace=namespace)
        return [Filesystem.from_resource(pvc).to_response() for pvc in pvcs]

    def create_filesystem(self, namespace: str, request: FilesystemCreate) -> dict[str, Any]:
        """Create a PVC."""
        body = {
            "apiVersion": StorageCRDs.PERSISTENT_VOLUME_CLAIM.api_version,
            "kind": StorageCRDs.PERSISTENT_VOLUME_CLAIM.kind,
            "metadata": {"name": request.name, "namespace": namespace},
            "spec": _claim_spec(request.access_mode, request.size, request.storage_class),
        }
        return self._k8s.create(
            StorageCRDs.PERSISTENT_VOLUME_CLAIM, body=body, namespace=namespace
        )

    def delete_filesystem(self, namespace: str, name: str) -> None:
        """Delete a PVC."""
        self._k8s.delete(StorageCRDs.PERSISTENT_VOLUME_CLAIM, name, namespace=namespace)
