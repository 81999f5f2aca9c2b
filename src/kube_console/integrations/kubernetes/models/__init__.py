"""Typed models for Kubernetes API objects."""

from kube_console.integrations.kubernetes.models.base import (
    ObjectMeta,
    OwnerReference,
    format_age,
    join_path,
    split_path,
)
from kube_console.integrations.kubernetes.models.resource import ResourceObject, decode_resource

__all__ = [
    "ObjectMeta",
    "OwnerReference",
    "ResourceObject",
    "decode_resource",
    "format_age",
    "join_path",
    "split_path",
]
