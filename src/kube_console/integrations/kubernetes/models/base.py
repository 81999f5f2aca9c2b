"""Base models for decoded Kubernetes objects."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class K8sModel(BaseModel):
    """Base class for models decoded from raw (camelCase) API objects."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )


class OwnerReference(K8sModel):
    """Kubernetes owner reference."""

    api_version: str | None = None
    kind: str | None = None
    name: str | None = None
    uid: str | None = None
    controller: bool | None = None


class ObjectMeta(K8sModel):
    """The subset of object metadata the console works with."""

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    creation_timestamp: str | None = Field(default=None, description="Creation time")
    labels: dict[str, str] = Field(default_factory=dict, description="Resource labels")
    annotations: dict[str, str] = Field(default_factory=dict, description="Resource annotations")
    owner_references: list[OwnerReference] = Field(
        default_factory=list, description="Owner references"
    )


def join_path(namespace: str | None, name: str) -> str:
    """Build the ``namespace/name`` path identifying a resource within its kind."""
    if not namespace:
        return name
    return f"{namespace}/{name}"


def split_path(path: str) -> tuple[str | None, str]:
    """Split a ``namespace/name`` path; cluster-scoped paths have no namespace."""
    namespace, sep, name = path.rpartition("/")
    if not sep:
        return None, path
    return namespace or None, name


def format_age(timestamp: str | None) -> str:
    """Human-readable age string for an ISO creation timestamp."""
    if not timestamp:
        return "Unknown"
    try:
        created = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        delta = datetime.now(UTC) - created
        days = delta.days
        hours, remainder = divmod(delta.seconds, 3600)
        minutes = remainder // 60
        if days > 0:
            return f"{days}d"
        if hours > 0:
            return f"{hours}h"
        return f"{minutes}m"
    except (ValueError, TypeError):
        return "Unknown"


def dig(data: Any, *keys: str, default: Any = None) -> Any:
    """Safely traverse nested mappings."""
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
    return current if current is not None else default
