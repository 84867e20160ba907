"""Utility functions and helpers for the VirtUI server."""

from virtui.utils.errors import (
    ClusterRequestError,
    ConfigurationError,
    ValidationError,
    VirtUIError,
)
from virtui.utils.fields import dig, join_or_placeholder

__all__ = [
    # Errors
    "VirtUIError",
    "ClusterRequestError",
    "ConfigurationError",
    "ValidationError",
    # Field access
    "dig",
    "join_or_placeholder",
]
