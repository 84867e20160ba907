"""Configuration for the VirtUI server."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportMode(str, Enum):
    """HTTP transport the server runs with."""

    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class AuthMode(str, Enum):
    """How cluster credentials are loaded."""

    AUTO = "auto"
    KUBECONFIG = "kubeconfig"
    IN_CLUSTER = "in_cluster"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


MUTATING_OPERATIONS = frozenset({"create", "delete", "patch"})


class VirtUIConfig(BaseSettings):
    """Configuration for the VirtUI server.

    Loaded from environment variables with the VIRTUI_ prefix
    or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIRTUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    transport: TransportMode = Field(
        default=TransportMode.STREAMABLE_HTTP,
        description="HTTP transport mode",
    )
    host: str = Field(default="127.0.0.1", description="Host to bind the HTTP server to")
    port: int = Field(default=3000, description="Port to bind the HTTP server to")

    # Cluster access
    auth_mode: AuthMode = Field(default=AuthMode.AUTO, description="Credential loading mode")
    kubeconfig_path: str | None = Field(default=None, description="Path to kubeconfig file")
    kubeconfig_context: str | None = Field(default=None, description="Kubeconfig context to use")

    # Request defaults
    default_namespace: str = Field(
        default="default",
        description="Namespace used when a request does not name one",
    )

    # Safety
    read_only_mode: bool = Field(
        default=False,
        description="Reject every operation that mutates cluster state",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    def validate_auth_config(self) -> list[str]:
        """Validate the credential settings.

        Returns:
            Warnings worth logging at startup.

        Raises:
            ValueError: If the configuration cannot work.
        """
        warnings: list[str] = []

        if self.auth_mode == AuthMode.KUBECONFIG and self.kubeconfig_path:
            if not Path(self.kubeconfig_path).expanduser().exists():
                raise ValueError(f"Kubeconfig file not found: {self.kubeconfig_path}")

        if self.auth_mode == AuthMode.IN_CLUSTER and self.kubeconfig_path:
            warnings.append("kubeconfig_path is ignored when auth_mode is in_cluster")

        if self.read_only_mode:
            warnings.append("Read-only mode enabled: create, delete and patch are disabled")

        return warnings

    def is_operation_allowed(self, operation: str) -> tuple[bool, str | None]:
        """Check whether an operation may run under the current settings.

        Args:
            operation: Operation name ("create", "delete", "patch", "list", ...).

        Returns:
            Tuple of (allowed, reason); reason is None when allowed.
        """
        if self.read_only_mode and operation in MUTATING_OPERATIONS:
            return False, f"Operation '{operation}' is not allowed in read-only mode"
        return True, None


@lru_cache(maxsize=1)
def get_config() -> VirtUIConfig:
    """Get the process-wide configuration."""
    return VirtUIConfig()
