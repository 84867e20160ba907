"""Shared behaviour for views joined from several cluster reads."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from virtui.utils.errors import ClusterRequestError

if TYPE_CHECKING:
    from virtui.clients.base import CRDDefinition, K8sClient

logger = logging.getLogger(__name__)


def list_or_empty(
    k8s: K8sClient,
    crd: CRDDefinition,
    namespace: str | None = None,
) -> list[dict[str, Any]]:
    """List resources, degrading to an empty list if the call fails.

    Used for the secondary half of a join, where a missing source must not
    fail the whole read. The failure is logged with the resource kind.
    """
    try:
        return k8s.list_resources(crd, namespace=namespace)
    except ClusterRequestError as e:
        scope = f" in namespace '{namespace}'" if namespace else ""
        logger.warning(f"Failed to list {crd.kind}{scope}, continuing with none: {e}")
        return []
