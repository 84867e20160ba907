"""Compute domain: KubeVirt virtual machines."""
