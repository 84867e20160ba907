"""Base class and metadata for VirtUI plugins."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from virtui.hooks import hookimpl
from virtui.utils.errors import ClusterRequestError

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.clients.base import CRDDefinition
    from virtui.server import VirtUIServer

logger = logging.getLogger(__name__)


@dataclass
class PluginMetadata:
    """Identity of a plugin and the resource kinds it depends on.

    Attributes:
        name: Unique plugin name, e.g. "compute" or "network".
        version: Semantic version of the plugin.
        description: One line shown in the plugins resource.
        maintainer: Owning team or contact address.
        requires_crds: Kinds that must be served by the cluster for the
            plugin to be reported healthy. Kinds are looked up among the
            plugin's own CRD definitions.
    """

    name: str
    version: str
    description: str
    maintainer: str
    requires_crds: list[str] = field(default_factory=list)


class BasePlugin:
    """Plugin with no routes, tools or CRDs; subclasses override what they provide.

    External packages register subclasses through an entry point:

        [project.entry-points."virtui.plugins"]
        backups = "virtui_backups.plugin:BackupPlugin"
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @hookimpl
    def virtui_get_plugin_metadata(self) -> PluginMetadata:
        return self._metadata

    @hookimpl
    def virtui_register_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        return None

    @hookimpl
    def virtui_register_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        return None

    @hookimpl
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:
        return []

    @hookimpl
    def virtui_health_check(self, server: VirtUIServer) -> tuple[bool, str]:
        """Resolve each required kind against the cluster's discovery API."""
        required = self._metadata.requires_crds
        if not required:
            return True, "No CRD requirements"

        known = {crd.kind: crd for crd in self.virtui_get_crd_definitions()}
        missing = [kind for kind in required if not self._is_served(server, known.get(kind))]

        if missing:
            return False, f"Missing CRDs: {', '.join(missing)}"
        return True, "All required CRDs available"

    @staticmethod
    def _is_served(server: VirtUIServer, crd: CRDDefinition | None) -> bool:
        if crd is None:
            return False
        try:
            server.k8s.get_resource(crd)
        except ClusterRequestError as e:
            logger.debug(f"{crd.kind} is not served: {e}")
            return False
        return True
