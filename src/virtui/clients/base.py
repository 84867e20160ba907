"""Kubernetes client wrapper and resource definitions.

``K8sClient`` is the only component that talks to the cluster API. Every
method is one remote request; results are returned as plain dicts so they
can be passed straight back to HTTP callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import ResourceNotFoundError
from urllib3.exceptions import HTTPError

from virtui.config import AuthMode, VirtUIConfig, get_config
from virtui.utils.errors import ClusterRequestError, ConfigurationError

if TYPE_CHECKING:
    from kubernetes.dynamic.resource import Resource

logger = logging.getLogger(__name__)

MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"


@dataclass(frozen=True)
class CRDDefinition:
    """Addressing information for a resource type served by the cluster."""

    group: str
    version: str
    plural: str
    kind: str
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        """apiVersion string; core resources have no group prefix."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


class CoreResources:
    """Built-in Kubernetes resource types used by the dashboard."""

    NAMESPACE = CRDDefinition(
        group="", version="v1", plural="namespaces", kind="Namespace", namespaced=False
    )
    PERSISTENT_VOLUME_CLAIM = CRDDefinition(
        group="", version="v1", plural="persistentvolumeclaims", kind="PersistentVolumeClaim"
    )
    SERVICE = CRDDefinition(group="", version="v1", plural="services", kind="Service")


@contextmanager
def _cluster_errors(
    operation: str,
    crd: CRDDefinition,
    name: str | None = None,
    namespace: str | None = None,
) -> Iterator[None]:
    """Re-raise API failures as ClusterRequestError."""
    try:
        yield
    except ApiException as e:
        raise ClusterRequestError(
            operation, crd.kind, name=name, namespace=namespace, status=e.status, reason=e.reason
        ) from e
    except HTTPError as e:
        raise ClusterRequestError(
            operation, crd.kind, name=name, namespace=namespace, reason=str(e)
        ) from e


class K8sClient:
    """Thin wrapper around the Kubernetes dynamic client.

    A single instance is created at startup and shared by all requests.
    It holds no per-request state.
    """

    def __init__(self, config_obj: VirtUIConfig | None = None) -> None:
        self._config = config_obj or get_config()
        self._api_client: client.ApiClient | None = None
        self._dynamic_client: DynamicClient | None = None
        self._crd_cache: dict[str, Resource] = {}

    # -------------------------------------------------------------------------
    # Connection lifecycle
    # -------------------------------------------------------------------------

    def connect(self) -> None:
        """Load credentials and build the dynamic client.

        Raises:
            ConfigurationError: If no usable cluster credentials were found.
        """
        api_client = self._load_api_client()
        try:
            self._dynamic_client = DynamicClient(api_client)
        except Exception as e:
            api_client.close()
            raise ConfigurationError(f"Failed to reach the cluster API: {e}") from e

        self._api_client = api_client
        logger.info(f"Connected to cluster at {api_client.configuration.host}")

    def disconnect(self) -> None:
        """Release the API client."""
        if self._api_client is not None:
            self._api_client.close()
        self._api_client = None
        self._dynamic_client = None
        self._crd_cache.clear()
        logger.info("Disconnected from cluster")

    @property
    def is_connected(self) -> bool:
        """Whether connect() has succeeded."""
        return self._dynamic_client is not None

    @property
    def dynamic_client(self) -> DynamicClient:
        """Get the dynamic client.

        Raises:
            RuntimeError: If not connected.
        """
        if self._dynamic_client is None:
            raise RuntimeError("K8s client not connected. Call connect() first.")
        return self._dynamic_client

    def _load_api_client(self) -> client.ApiClient:
        mode = self._config.auth_mode

        if mode in (AuthMode.AUTO, AuthMode.IN_CLUSTER):
            try:
                config.load_incluster_config()
                logger.info("Using in-cluster service account credentials")
                return client.ApiClient()
            except ConfigException as e:
                if mode == AuthMode.IN_CLUSTER:
                    raise ConfigurationError(f"In-cluster configuration unavailable: {e}") from e
                logger.debug(f"Not running in-cluster, falling back to kubeconfig: {e}")

        try:
            api_client = config.new_client_from_config(
                config_file=self._config.kubeconfig_path,
                context=self._config.kubeconfig_context,
            )
        except (ConfigException, OSError) as e:
            raise ConfigurationError(f"Failed to load kubeconfig: {e}") from e

        logger.info("Using kubeconfig credentials")
        return api_client

    # -------------------------------------------------------------------------
    # Generic resource operations
    # -------------------------------------------------------------------------

    def get_resource(self, crd: CRDDefinition) -> Resource:
        """Resolve the API resource handle for a definition.

        Handles are discovery metadata, not cluster state, and are memoised.

        Raises:
            ClusterRequestError: If the cluster does not serve the resource.
        """
        cache_key = f"{crd.api_version}/{crd.plural}"
        if cache_key not in self._crd_cache:
            try:
                with _cluster_errors("resolve", crd):
                    self._crd_cache[cache_key] = self.dynamic_client.resources.get(
                        api_version=crd.api_version, kind=crd.kind
                    )
            except ResourceNotFoundError as e:
                raise ClusterRequestError(
                    "resolve", crd.kind, reason=f"{crd.api_version} is not served by the cluster"
                ) from e
        return self._crd_cache[cache_key]

    def list_resources(
        self,
        crd: CRDDefinition,
        namespace: str | None = None,
    ) -> list[dict[str, Any]]:
        """List resources in a namespace, or cluster-wide when namespace is None."""
        resource = self.get_resource(crd)
        with _cluster_errors("list", crd, namespace=namespace):
            result = resource.get(namespace=namespace)
        items: list[dict[str, Any]] = result.to_dict().get("items") or []
        return items

    def get(
        self,
        crd: CRDDefinition,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Get a single resource by name."""
        resource = self.get_resource(crd)
        with _cluster_errors("get", crd, name=name, namespace=namespace):
            result = resource.get(name=name, namespace=namespace)
        obj: dict[str, Any] = result.to_dict()
        return obj

    def create(
        self,
        crd: CRDDefinition,
        body: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Create a resource from a complete document."""
        resource = self.get_resource(crd)
        name = body.get("metadata", {}).get("name")
        with _cluster_errors("create", crd, name=name, namespace=namespace):
            result = resource.create(body=body, namespace=namespace)
        obj: dict[str, Any] = result.to_dict()
        return obj

    def patch(
        self,
        crd: CRDDefinition,
        name: str,
        body: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Apply a JSON merge patch and return the patched document."""
        resource = self.get_resource(crd)
        with _cluster_errors("patch", crd, name=name, namespace=namespace):
            result = resource.patch(
                body=body,
                name=name,
                namespace=namespace,
                content_type=MERGE_PATCH_CONTENT_TYPE,
            )
        obj: dict[str, Any] = result.to_dict()
        return obj

    def delete(
        self,
        crd: CRDDefinition,
        name: str,
        namespace: str | None = None,
    ) -> None:
        """Delete a resource by name."""
        resource = self.get_resource(crd)
        with _cluster_errors("delete", crd, name=name, namespace=namespace):
            resource.delete(name=name, namespace=namespace)

    # -------------------------------------------------------------------------
    # Namespace operations
    # -------------------------------------------------------------------------

    def list_namespaces(self) -> list[dict[str, Any]]:
        """List all namespaces."""
        return self.list_resources(CoreResources.NAMESPACE)
