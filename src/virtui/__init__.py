"""VirtUI - dashboard backend for KubeVirt and Kube-OVN clusters."""

__version__ = "0.1.0"
