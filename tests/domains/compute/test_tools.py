"""Tests for compute MCP tools."""

from unittest.mock import MagicMock

from tests.resources import make_resource
from virtui.domains.compute.tools import register_tools


def test_list_virtual_machines_tool(tools: tuple, mock_server: MagicMock) -> None:
    """The list tool wraps the VM views with namespace and count."""
    captured, mcp = tools
    mock_server.k8s.list_resources.return_value = [
        make_resource("vm1", "lab", spec={"running": False})
    ]
    register_tools(mcp, mock_server)

    result = captured["list_virtual_machines"](namespace="lab")

    assert result["namespace"] == "lab"
    assert result["total"] == 1
    assert result["items"][0]["status"] == "Stopped"


def test_get_virtual_machine_tool_uses_default_namespace(
    tools: tuple, mock_server: MagicMock
) -> None:
    """Without a namespace the server default is used."""
    captured, mcp = tools
    mock_server.k8s.get.return_value = {"metadata": {"name": "vm1"}}
    register_tools(mcp, mock_server)

    assert captured["get_virtual_machine"]("vm1") == {"metadata": {"name": "vm1"}}
    assert mock_server.k8s.get.call_args.kwargs["namespace"] == "default"
