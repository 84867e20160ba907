"""Cluster API clients."""

from virtui.clients.base import CoreResources, CRDDefinition, K8sClient

__all__ = ["CRDDefinition", "CoreResources", "K8sClient"]
