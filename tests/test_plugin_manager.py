"""Tests for PluginManager and the core domain plugins."""

from unittest.mock import MagicMock

import pytest

from virtui.domains.compute.crds import ComputeCRDs
from virtui.domains.network.crds import NetworkCRDs
from virtui.domains.registry import ComputePlugin, NetworkPlugin, StoragePlugin, get_core_plugins
from virtui.domains.storage.crds import StorageCRDs
from virtui.plugin import BasePlugin, PluginMetadata
from virtui.plugin_manager import PluginManager
from virtui.utils.errors import ClusterRequestError


class TestPluginManager:
    """Test registration, hooks and health checks."""

    @pytest.fixture
    def pm(self) -> PluginManager:
        """Create a PluginManager with the core plugins loaded."""
        pm = PluginManager()
        pm.load_core_plugins()
        return pm

    def test_load_core_plugins(self, pm: PluginManager) -> None:
        """Core plugins are registered under their metadata names."""
        assert set(pm.registered_plugins) == {"compute", "storage", "network"}
        assert {m.name for m in pm.get_all_metadata()} == {"compute", "storage", "network"}

    def test_get_all_crd_definitions(self, pm: PluginManager) -> None:
        """CRD definitions from every plugin are flattened."""
        crds = pm.get_all_crd_definitions()

        assert ComputeCRDs.VIRTUAL_MACHINE in crds
        assert StorageCRDs.DATA_VOLUME in crds
        assert NetworkCRDs.IPTABLES_DNAT_RULE in crds
        assert NetworkCRDs.VIP in crds

    def test_register_all_routes_and_tools(self, pm: PluginManager) -> None:
        """Every plugin registers routes and tools on the given FastMCP."""
        mcp = MagicMock()
        mcp.custom_route = MagicMock(return_value=lambda f: f)
        mcp.tool = MagicMock(return_value=lambda f: f)
        server = MagicMock()

        pm.register_all_routes(mcp, server)
        pm.register_all_tools(mcp, server)

        paths = {c.args[0] for c in mcp.custom_route.call_args_list}
        assert "/api/compute/vms" in paths
        assert "/api/storage/filesystems/{name}" in paths
        assert "/api/network/loadbalancers" in paths
        assert mcp.tool.call_count >= 9

    def test_health_checks_all_crds_available(self, pm: PluginManager) -> None:
        """Plugins are healthy when their CRDs resolve."""
        server = MagicMock()

        results = pm.run_health_checks(server)

        assert all(healthy for healthy, _ in results.values())
        assert set(pm.healthy_plugins) == {"compute", "storage", "network"}

    def test_health_check_missing_crd(self, pm: PluginManager) -> None:
        """A plugin whose CRD is not served is unhealthy; others stay healthy."""
        server = MagicMock()

        def get_resource(crd):
            if crd.group == "kubeovn.io":
                raise ClusterRequestError("resolve", crd.kind, reason="not served")
            return MagicMock()

        server.k8s.get_resource.side_effect = get_resource

        results = pm.run_health_checks(server)

        healthy, message = results["network"]
        assert healthy is False
        assert "Vpc" in message
        assert set(pm.healthy_plugins) == {"compute", "storage"}

    def test_health_check_error_is_contained(self) -> None:
        """An exception in one plugin's health check only marks that plugin."""

        class BrokenPlugin(BasePlugin):
            def virtui_health_check(self, server):
                raise RuntimeError("boom")

        pm = PluginManager()
        pm.register_plugin(
            BrokenPlugin(PluginMetadata("broken", "0.1.0", "Broken", "test@example.com"))
        )

        results = pm.run_health_checks(MagicMock())

        assert results["broken"] == (False, "Health check error: boom")
        assert pm.healthy_plugins == {}


class TestCorePlugins:
    """Test the domain plugin classes."""

    def test_get_core_plugins(self) -> None:
        """One plugin per domain."""
        plugins = get_core_plugins()
        assert [type(p) for p in plugins] == [ComputePlugin, StoragePlugin, NetworkPlugin]

    def test_base_plugin_without_requirements_is_healthy(self) -> None:
        """A plugin with no CRD requirements needs no cluster access."""
        plugin = BasePlugin(PluginMetadata("bare", "1.0.0", "Bare", "test@example.com"))
        server = MagicMock()

        assert plugin.virtui_health_check(server) == (True, "No CRD requirements")
        server.k8s.get_resource.assert_not_called()
