"""Helpers for reading fields out of raw Kubernetes documents."""

from collections.abc import Iterable
from typing import Any

PLACEHOLDER = "-"


def dig(obj: Any, *path: str | int) -> Any:
    """Walk nested dicts and lists, returning None at the first missing step.

    Example:
        dig(vmi, "status", "interfaces", 0, "ipAddress")
    """
    current = obj
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def join_or_placeholder(values: Iterable[Any], separator: str = ", ") -> str:
    """Join values as strings, or return the placeholder when there are none."""
    joined = separator.join(str(v) for v in values)
    return joined or PLACEHOLDER
