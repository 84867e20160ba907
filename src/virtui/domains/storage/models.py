"""Pydantic models for block volumes, snapshots and filesystems."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from virtui.models.common import PLACEHOLDER, NamespacedView
from virtui.utils.fields import dig, join_or_placeholder

DEFAULT_SIZE = "10Gi"


class StorageAccessMode(str, Enum):
    """PVC access modes."""

    READ_WRITE_ONCE = "ReadWriteOnce"
    READ_ONLY_MANY = "ReadOnlyMany"
    READ_WRITE_MANY = "ReadWriteMany"
    READ_WRITE_ONCE_POD = "ReadWriteOncePod"


class DataVolumeSourceType(str, Enum):
    """Where a DataVolume is populated from."""

    HTTP = "http"
    BLANK = "blank"
    PVC = "pvc"


class SnapshotStatus(str, Enum):
    """VolumeSnapshot readiness."""

    READY = "Ready"
    PENDING = "Pending"


# -----------------------------------------------------------------------------
# Views
# -----------------------------------------------------------------------------


class BlockVolume(NamespacedView):
    """DataVolume (block storage) representation."""

    status: str = Field("Unknown", description="Import phase")
    progress: str = Field("0%", description="Import progress")
    size: str = Field(PLACEHOLDER, description="Requested size")
    source: str = Field(PLACEHOLDER, description="Source kind (http, blank, pvc, ...)")

    @classmethod
    def from_resource(cls, dv: dict[str, Any]) -> "BlockVolume":
        """Create from a CDI DataVolume."""
        # Older DataVolumes use spec.pvc, newer ones may use spec.storage
        size = dig(dv, "spec", "pvc", "resources", "requests", "storage") or dig(
            dv, "spec", "storage", "resources", "requests", "storage"
        )
        source = dig(dv, "spec", "source")

        return cls(
            **cls.metadata_fields(dv),
            status=dig(dv, "status", "phase") or "Unknown",
            progress=dig(dv, "status", "progress") or "0%",
            size=str(size or PLACEHOLDER),
            source=next(iter(source), PLACEHOLDER) if isinstance(source, dict) else PLACEHOLDER,
        )


class VolumeSnapshot(NamespacedView):
    """VolumeSnapshot representation."""

    status: SnapshotStatus = Field(SnapshotStatus.PENDING, description="Readiness")
    source_pvc: str = Field(PLACEHOLDER, alias="sourcePvc", description="Source PVC name")
    snapshot_class: str = Field(
        PLACEHOLDER, alias="snapshotClass", description="VolumeSnapshotClass name"
    )
    restore_size: str = Field(PLACEHOLDER, alias="restoreSize", description="Restore size")

    @classmethod
    def from_resource(cls, snapshot: dict[str, Any]) -> "VolumeSnapshot":
        """Create from a VolumeSnapshot."""
        ready = bool(dig(snapshot, "status", "readyToUse"))
        return cls(
            **cls.metadata_fields(snapshot),
            status=SnapshotStatus.READY if ready else SnapshotStatus.PENDING,
            source_pvc=dig(snapshot, "spec", "source", "persistentVolumeClaimName")
            or PLACEHOLDER,
            snapshot_class=dig(snapshot, "spec", "volumeSnapshotClassName") or PLACEHOLDER,
            restore_size=str(dig(snapshot, "status", "restoreSize") or PLACEHOLDER),
        )


class Filesystem(NamespacedView):
    """PersistentVolumeClaim (filesystem storage) representation."""

    status: str = Field("Unknown", description="PVC phase")
    size: str = Field(PLACEHOLDER, description="Requested size")
    access_modes: str = Field(PLACEHOLDER, alias="accessModes", description="Access modes")
    storage_class: str = Field(PLACEHOLDER, alias="storageClass", description="Storage class")
    volume_name: str = Field(PLACEHOLDER, alias="volumeName", description="Bound volume name")

    @classmethod
    def from_resource(cls, pvc: dict[str, Any]) -> "Filesystem":
        """Create from a PersistentVolumeClaim."""
        return cls(
            **cls.metadata_fields(pvc),
            status=dig(pvc, "status", "phase") or "Unknown",
            size=str(dig(pvc, "spec", "resources", "requests", "storage") or PLACEHOLDER),
            access_modes=join_or_placeholder(dig(pvc, "spec", "accessModes") or []),
            storage_class=dig(pvc, "spec", "storageClassName") or PLACEHOLDER,
            volume_name=dig(pvc, "spec", "volumeName") or PLACEHOLDER,
        )


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class BlockVolumeCreate(BaseModel):
    """Request model for creating a DataVolume."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="DataVolume name")
    size: str | None = Field(None, description="Storage size")
    source_type: str | None = Field(
        None,
        alias="sourceType",
        description="'http', 'blank', or anything else to clone a PVC",
    )
    source_url: str | None = Field(None, alias="sourceUrl", description="Image URL for http")
    source_pvc: str | None = Field(None, alias="sourcePvc", description="PVC to clone")
    source_pvc_namespace: str | None = Field(
        None, alias="sourcePvcNamespace", description="Namespace of the PVC to clone"
    )
    access_mode: StorageAccessMode | None = Field(None, alias="accessMode")
    storage_class: str | None = Field(None, alias="storageClass")

    @field_validator("access_mode", mode="before")
    @classmethod
    def _blank_access_mode(cls, value: Any) -> Any:
        # Forms submit "" for an unselected option
        return value or None

    @property
    def source_kind(self) -> DataVolumeSourceType:
        """Resolved source; unrecognised values clone a PVC."""
        if self.source_type == DataVolumeSourceType.HTTP.value:
            return DataVolumeSourceType.HTTP
        if self.source_type == DataVolumeSourceType.BLANK.value:
            return DataVolumeSourceType.BLANK
        return DataVolumeSourceType.PVC

    @model_validator(mode="after")
    def _check_source(self) -> "BlockVolumeCreate":
        if self.source_kind == DataVolumeSourceType.HTTP and not self.source_url:
            raise ValueError("sourceUrl is required when sourceType is 'http'")
        if self.source_kind == DataVolumeSourceType.PVC and not self.source_pvc:
            raise ValueError("sourcePvc is required to clone a PVC")
        return self


class VolumeSnapshotCreate(BaseModel):
    """Request model for creating a VolumeSnapshot."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Snapshot name")
    source_pvc: str = Field(..., min_length=1, alias="sourcePvc", description="PVC to snapshot")
    snapshot_class: str | None = Field(None, alias="snapshotClass")


class FilesystemCreate(BaseModel):
    """Request model for creating a PVC."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="PVC name")
    size: str | None = Field(None, description="Storage size")
    access_mode: StorageAccessMode | None = Field(None, alias="accessMode")
    storage_class: str | None = Field(None, alias="storageClass")

    @field_validator("access_mode", mode="before")
    @classmethod
    def _blank_access_mode(cls, value: Any) -> Any:
        # Forms submit "" for an unselected option
        return value or None
