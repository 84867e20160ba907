"""Pluggy-based discovery and health tracking for VirtUI domain plugins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from virtui.hooks import PROJECT_NAME, VirtUIHookSpec

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from virtui.clients.base import CRDDefinition
    from virtui.plugin import PluginMetadata
    from virtui.server import VirtUIServer

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "virtui.plugins"

HealthResult = tuple[bool, str]


class PluginManager:
    """Registry of the plugins that contribute routes, tools and CRDs.

    The compute, storage and network domains are registered as core plugins;
    packages exposing the ``virtui.plugins`` entry point are added alongside
    them. Health is tracked per plugin and never removes a plugin's routes.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(VirtUIHookSpec)
        self._plugins: dict[str, Any] = {}
        self._healthy: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Pluggy hook relay."""
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        """Every registered plugin, keyed by name."""
        return self._plugins

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Plugins whose last health check passed, keyed by name."""
        return self._healthy

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register a plugin and return the name it was registered under.

        Without an explicit name the plugin's metadata name is used, falling
        back to its class name for plugins that publish no metadata.
        """
        if name is None:
            name = _plugin_name(plugin)
        self._pm.register(plugin, name=name)
        self._plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")
        return name

    def load_core_plugins(self) -> int:
        """Register the compute, storage and network plugins."""
        from virtui.domains.registry import get_core_plugins

        plugins = get_core_plugins()
        for plugin in plugins:
            self.register_plugin(plugin)

        logger.info(f"Loaded {len(plugins)} core domain plugins")
        return len(plugins)

    def load_entrypoint_plugins(self) -> int:
        """Load plugins advertised under the virtui.plugins entry point group."""
        count = self._pm.load_setuptools_entrypoints(PLUGIN_ENTRY_POINT_GROUP)

        for plugin in self._pm.get_plugins():
            name = self._pm.get_name(plugin)
            if name and name not in self._plugins:
                self._plugins[name] = plugin
                logger.info(f"Loaded external plugin: {name}")

        if count:
            logger.info(f"Loaded {count} external plugins")
        return count

    def get_all_metadata(self) -> list[PluginMetadata]:
        return [meta for meta in self.hook.virtui_get_plugin_metadata() if meta is not None]

    def get_all_crd_definitions(self) -> list[CRDDefinition]:
        """Every custom resource any plugin declares, in registration order."""
        crds: list[CRDDefinition] = []
        for plugin_crds in self.hook.virtui_get_crd_definitions():
            crds.extend(plugin_crds or [])
        return crds

    def register_all_routes(self, mcp: FastMCP, server: VirtUIServer) -> None:
        """Let every plugin add its /api routes to the FastMCP HTTP app."""
        self.hook.virtui_register_routes(mcp=mcp, server=server)
        logger.info(f"Registered REST routes from {len(self._plugins)} plugins")

    def register_all_tools(self, mcp: FastMCP, server: VirtUIServer) -> None:
        """Let every plugin add its read-only MCP tools."""
        self.hook.virtui_register_tools(mcp=mcp, server=server)
        logger.info(f"Registered MCP tools from {len(self._plugins)} plugins")

    def run_health_checks(self, server: VirtUIServer) -> dict[str, HealthResult]:
        """Check every plugin against the connected cluster.

        Replaces the healthy set with the plugins that pass. An exception
        raised by one plugin's check marks only that plugin unhealthy.

        Returns:
            Mapping of plugin name to (healthy, message).
        """
        self._healthy = {}
        results: dict[str, HealthResult] = {}

        for name, plugin in self._plugins.items():
            healthy, message = _check_plugin(plugin, server)
            results[name] = (healthy, message)
            if healthy:
                self._healthy[name] = plugin
                logger.info(f"Plugin {name} is healthy: {message}")
            else:
                logger.warning(f"Plugin {name} is unavailable: {message}")

        return results


def _plugin_name(plugin: Any) -> str:
    get_metadata = getattr(plugin, "virtui_get_plugin_metadata", None)
    if get_metadata is None:
        return type(plugin).__name__
    return str(get_metadata().name)


def _check_plugin(plugin: Any, server: VirtUIServer) -> HealthResult:
    check = getattr(plugin, "virtui_health_check", None)
    if check is None:
        return True, "No health check defined"
    try:
        healthy, message = check(server=server)
    except Exception as e:
        return False, f"Health check error: {e}"
    return bool(healthy), message
