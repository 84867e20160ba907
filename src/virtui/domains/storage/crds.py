"""CRD definitions for storage resources."""

from virtui.clients.base import CoreResources, CRDDefinition


class StorageCRDs:
    """CDI and CSI snapshot CRD definitions."""

    DATA_VOLUME = CRDDefinition(
        group="cdi.kubevirt.io",
        version="v1beta1",
        plural="datavolumes",
        kind="DataVolume",
    )

    VOLUME_SNAPSHOT = CRDDefinition(
        group="snapshot.storage.k8s.io",
        version="v1",
        plural="volumesnapshots",
        kind="VolumeSnapshot",
    )

    PERSISTENT_VOLUME_CLAIM = CoreResources.PERSISTENT_VOLUME_CLAIM

    @classmethod
    def all_crds(cls) -> list[CRDDefinition]:
        """Return the custom resource definitions (core types excluded)."""
        return [cls.DATA_VOLUME, cls.VOLUME_SNAPSHOT]
