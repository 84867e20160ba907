"""Tests for storage MCP tools."""

from unittest.mock import MagicMock

from tests.resources import make_resource
from virtui.domains.storage.crds import StorageCRDs
from virtui.domains.storage.tools import register_tools


def test_list_block_volumes_tool(tools: tuple, mock_server: MagicMock) -> None:
    """The DataVolume tool reports import phase and source kind."""
    captured, mcp = tools
    mock_server.k8s.list_resources.return_value = [
        make_resource(
            "disk1",
            "lab",
            spec={"source": {"http": {"url": "https://example.com/disk.img"}}},
            status={"phase": "ImportInProgress", "progress": "42.0%"},
        )
    ]
    register_tools(mcp, mock_server)

    result = captured["list_block_volumes"](namespace="lab")

    assert result["namespace"] == "lab"
    assert result["total"] == 1
    assert result["items"][0]["status"] == "ImportInProgress"
    assert result["items"][0]["source"] == "http"
    mock_server.k8s.list_resources.assert_called_once_with(
        StorageCRDs.DATA_VOLUME, namespace="lab"
    )


def test_list_volume_snapshots_default_namespace(tools: tuple, mock_server: MagicMock) -> None:
    """Without a namespace the server default is used."""
    captured, mcp = tools
    mock_server.k8s.list_resources.return_value = [
        make_resource("snap1", "default", status={"readyToUse": True})
    ]
    register_tools(mcp, mock_server)

    result = captured["list_volume_snapshots"]()

    assert result["namespace"] == "default"
    assert result["items"][0]["status"] == "Ready"


def test_list_filesystems_tool(tools: tuple, mock_server: MagicMock) -> None:
    """The PVC tool joins access modes for display."""
    captured, mcp = tools
    mock_server.k8s.list_resources.return_value = [
        make_resource(
            "data",
            "lab",
            spec={"accessModes": ["ReadWriteOnce", "ReadOnlyMany"]},
            status={"phase": "Bound"},
        )
    ]
    register_tools(mcp, mock_server)

    result = captured["list_filesystems"](namespace="lab")

    assert result["items"][0]["accessModes"] == "ReadWriteOnce, ReadOnlyMany"
    assert result["items"][0]["status"] == "Bound"
