"""Common Pydantic models shared across dashboard views."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from virtui.utils.fields import PLACEHOLDER, dig

__all__ = ["PLACEHOLDER", "NamespaceInfo", "NamespacedView", "ResourceView"]


class ResourceView(BaseModel):
    """Flattened, JSON-ready view of one or more cluster objects.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, description="Resource name")
    created_at: str | None = Field(None, alias="createdAt", description="Creation timestamp")

    def to_response(self) -> dict[str, Any]:
        """Serialize with wire field names."""
        return self.model_dump(by_alias=True, mode="json")

    @staticmethod
    def metadata_fields(obj: dict[str, Any]) -> dict[str, Any]:
        """Identity fields copied verbatim from the object's metadata."""
        return {
            "name": dig(obj, "metadata", "name"),
            "created_at": _timestamp(dig(obj, "metadata", "creationTimestamp")),
        }


class NamespacedView(ResourceView):
    """View of a namespaced object."""

    namespace: str | None = Field(None, description="Resource namespace")

    @staticmethod
    def metadata_fields(obj: dict[str, Any]) -> dict[str, Any]:
        fields = ResourceView.metadata_fields(obj)
        fields["namespace"] = dig(obj, "metadata", "namespace")
        return fields


def _timestamp(value: Any) -> str | None:
    """Normalize a creationTimestamp to its RFC 3339 string form."""
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return str(value.isoformat().replace("+00:00", "Z"))
    return str(value)


class NamespaceInfo(ResourceView):
    """Namespace with its lifecycle phase."""

    status: str = Field("Unknown", description="Namespace phase")

    @classmethod
    def from_resource(cls, ns: dict[str, Any]) -> "NamespaceInfo":
        """Create from a core Namespace."""
        return cls(
            **cls.metadata_fields(ns),
            status=dig(ns, "status", "phase") or "Unknown",
        )
