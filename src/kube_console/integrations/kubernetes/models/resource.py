"""Typed decoding of raw Kubernetes API objects."""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError

from kube_console.integrations.kubernetes.exceptions import KubernetesDecodeError
from kube_console.integrations.kubernetes.models.base import (
    K8sModel,
    ObjectMeta,
    OwnerReference,
    dig,
    format_age,
    join_path,
)


class ResourceObject(K8sModel):
    """Any namespaced or cluster-scoped Kubernetes object."""

    api_version: str | None = None
    kind: str | None = None
    metadata: ObjectMeta
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    @property
    def path(self) -> str:
        """The ``namespace/name`` identity of this object."""
        return join_path(self.metadata.namespace, self.metadata.name)

    @property
    def owner_references(self) -> list[OwnerReference]:
        return self.metadata.owner_references

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations

    @property
    def age(self) -> str:
        return format_age(self.metadata.creation_timestamp)

    def spec_field(self, *keys: str, default: Any = None) -> Any:
        """Read a nested spec field."""
        return dig(self.spec, *keys, default=default)

    def status_field(self, *keys: str, default: Any = None) -> Any:
        """Read a nested status field."""
        return dig(self.status, *keys, default=default)


def decode_resource(raw: Any, kind: str | None = None) -> ResourceObject:
    """Decode a raw API object into a ResourceObject.

    Args:
        raw: The object as returned by the API (a camelCase mapping).
        kind: Expected kind. When given, an object declaring another kind
            is rejected.

    Returns:
        The decoded object.

    Raises:
        KubernetesDecodeError: If the object is not a mapping, fails
            validation, or is of an unexpected kind.
    """
    if not isinstance(raw, dict):
        raise KubernetesDecodeError(
            f"Expected a mapping, got {type(raw).__name__}", resource_type=kind
        )
    try:
        obj = ResourceObject.model_validate(raw)
    except ValidationError as e:
        raise KubernetesDecodeError(resource_type=kind, errors=e.errors()) from e
    if kind and obj.kind and obj.kind != kind:
        raise KubernetesDecodeError(f"Got a {obj.kind}", resource_type=kind)
    return obj
