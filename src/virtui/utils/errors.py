"""Exception types raised by VirtUI."""

from __future__ import annotations


class VirtUIError(Exception):
    """Base class for VirtUI errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClusterRequestError(VirtUIError):
    """A call against the cluster API failed.

    Carries the remote HTTP status when the API server answered, or None
    when the request never produced a response (for example, the resource
    kind is not served by the cluster).
    """

    def __init__(
        self,
        operation: str,
        kind: str,
        name: str | None = None,
        namespace: str | None = None,
        status: int | None = None,
        reason: str | None = None,
    ) -> None:
        target = kind if name is None else f"{kind} '{name}'"
        if namespace:
            target = f"{target} in namespace '{namespace}'"
        message = f"Failed to {operation} {target}"
        if status is not None:
            message += f" (HTTP {status})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.operation = operation
        self.kind = kind
        self.name = name
        self.namespace = namespace
        self.status = status
        self.reason = reason


class ConfigurationError(VirtUIError):
    """The server could not be configured to reach the cluster."""


class ValidationError(VirtUIError):
    """A request body was malformed or failed validation."""
