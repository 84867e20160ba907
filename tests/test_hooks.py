"""Tests for the hook specifications external plugins implement."""

from unittest.mock import MagicMock

import pluggy
import pytest

from virtui.clients.base import CRDDefinition
from virtui.hooks import PROJECT_NAME, VirtUIHookSpec, hookimpl
from virtui.plugin import BasePlugin, PluginMetadata
from virtui.plugin_manager import PluginManager

BACKUP = CRDDefinition(group="velero.io", version="v1", plural="backups", kind="Backup")


class BackupPlugin(BasePlugin):
    """Minimal third-party plugin adding one route and one CRD."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="backup",
                version="0.1.0",
                description="VM backups",
                maintainer="ops@example.com",
                requires_crds=["Backup"],
            )
        )

    @hookimpl
    def virtui_register_routes(self, mcp, server) -> None:
        mcp.custom_route("/api/backups", methods=["GET"])

    @hookimpl
    def virtui_get_crd_definitions(self) -> list[CRDDefinition]:
        return [BACKUP]


@pytest.fixture
def pm() -> PluginManager:
    pm = PluginManager()
    pm.register_plugin(BackupPlugin())
    return pm


def test_hookspecs_use_project_prefix() -> None:
    """Every hook is namespaced with the project marker."""
    pm = pluggy.PluginManager(PROJECT_NAME)
    pm.add_hookspecs(VirtUIHookSpec)

    for name in (
        "virtui_get_plugin_metadata",
        "virtui_register_routes",
        "virtui_register_tools",
        "virtui_get_crd_definitions",
        "virtui_health_check",
    ):
        assert hasattr(pm.hook, name)


def test_external_plugin_registers_under_metadata_name(pm: PluginManager) -> None:
    assert list(pm.registered_plugins) == ["backup"]
    assert pm.get_all_crd_definitions() == [BACKUP]


def test_external_plugin_routes_reach_the_app(pm: PluginManager) -> None:
    """Routes from an external plugin are added through the same hook as core ones."""
    mcp = MagicMock()

    pm.register_all_routes(mcp, MagicMock())

    mcp.custom_route.assert_called_once_with("/api/backups", methods=["GET"])


def test_external_plugin_health_uses_its_crds(pm: PluginManager) -> None:
    """The default health check resolves the plugin's declared CRDs."""
    server = MagicMock()

    results = pm.run_health_checks(server)

    server.k8s.get_resource.assert_called_once_with(BACKUP)
    assert results["backup"] == (True, "All required CRDs available")


def test_plugin_without_metadata_uses_class_name() -> None:
    """Plain hook objects are accepted."""

    class ToolsOnly:
        @hookimpl
        def virtui_register_tools(self, mcp, server) -> None:
            mcp.tool()

    pm = PluginManager()

    assert pm.register_plugin(ToolsOnly()) == "ToolsOnly"
    assert pm.run_health_checks(MagicMock()) == {"ToolsOnly": (True, "No health check defined")}
