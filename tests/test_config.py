"""Tests for VirtUI configuration."""

from pathlib import Path

import pytest

from virtui.config import AuthMode, TransportMode, VirtUIConfig


class TestConfigLoading:
    """Test defaults and environment loading."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Defaults apply when nothing is set."""
        monkeypatch.chdir(tmp_path)
        for var in ("VIRTUI_PORT", "VIRTUI_DEFAULT_NAMESPACE", "VIRTUI_READ_ONLY_MODE"):
            monkeypatch.delenv(var, raising=False)

        config = VirtUIConfig()

        assert config.port == 3000
        assert config.default_namespace == "default"
        assert config.read_only_mode is False
        assert config.transport == TransportMode.STREAMABLE_HTTP
        assert config.auth_mode == AuthMode.AUTO

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """VIRTUI_ variables override defaults."""
        monkeypatch.setenv("VIRTUI_PORT", "8080")
        monkeypatch.setenv("VIRTUI_DEFAULT_NAMESPACE", "lab")
        monkeypatch.setenv("VIRTUI_READ_ONLY_MODE", "true")

        config = VirtUIConfig()

        assert config.port == 8080
        assert config.default_namespace == "lab"
        assert config.read_only_mode is True


class TestValidateAuthConfig:
    """Test credential setting validation."""

    def test_missing_kubeconfig_raises(self, tmp_path: Path) -> None:
        """An explicit kubeconfig that does not exist is an error."""
        config = VirtUIConfig(
            auth_mode=AuthMode.KUBECONFIG,
            kubeconfig_path=str(tmp_path / "missing"),
        )

        with pytest.raises(ValueError, match="Kubeconfig file not found"):
            config.validate_auth_config()

    def test_existing_kubeconfig(self, tmp_path: Path) -> None:
        """An existing kubeconfig passes without warnings."""
        kubeconfig = tmp_path / "config"
        kubeconfig.write_text("apiVersion: v1\n")
        config = VirtUIConfig(
            auth_mode=AuthMode.KUBECONFIG,
            kubeconfig_path=str(kubeconfig),
            read_only_mode=False,
        )

        assert config.validate_auth_config() == []

    def test_in_cluster_ignores_kubeconfig(self) -> None:
        """A kubeconfig path with in-cluster auth only warns."""
        config = VirtUIConfig(
            auth_mode=AuthMode.IN_CLUSTER,
            kubeconfig_path="/nonexistent",
            read_only_mode=False,
        )

        warnings = config.validate_auth_config()

        assert len(warnings) == 1
        assert "ignored" in warnings[0]

    def test_read_only_warns(self) -> None:
        """Read-only mode is announced at startup."""
        config = VirtUIConfig(read_only_mode=True)

        assert any("Read-only" in w for w in config.validate_auth_config())


class TestIsOperationAllowed:
    """Test operation gating."""

    @pytest.mark.parametrize("operation", ["create", "delete", "patch"])
    def test_read_only_blocks_mutations(self, operation: str) -> None:
        """Mutations are refused in read-only mode."""
        config = VirtUIConfig(read_only_mode=True)

        allowed, reason = config.is_operation_allowed(operation)

        assert allowed is False
        assert reason is not None
        assert operation in reason

    def test_read_only_allows_reads(self) -> None:
        """Reads are always allowed."""
        config = VirtUIConfig(read_only_mode=True)

        assert config.is_operation_allowed("list") == (True, None)

    def test_writable_allows_mutations(self) -> None:
        """Mutations run when read-only mode is off."""
        config = VirtUIConfig(read_only_mode=False)

        assert config.is_operation_allowed("delete") == (True, None)
