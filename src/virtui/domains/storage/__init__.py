"""Storage domain: CDI DataVolumes, VolumeSnapshots and PVCs."""
