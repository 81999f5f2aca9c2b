"""Fixtures for KubernetesApp tests.

The resource and workload managers are patched where the app builds them;
the resource manager serves a small fixed set of raw objects.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from kube_console.integrations.kubernetes.exceptions import KubernetesNotFoundError
from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.integrations.kubernetes.models import split_path
from kube_console.services.kubernetes.resource_manager import matches_selector


def _raw(
    kind: str,
    name: str,
    labels: dict[str, str],
    *,
    owner: tuple[str, str] | None = None,
    match_labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "namespace": "prod", "labels": labels}
    if owner is not None:
        metadata["ownerReferences"] = [
            {"apiVersion": "apps/v1", "kind": owner[0], "name": owner[1], "uid": f"uid-{owner[1]}"}
        ]
    spec: dict[str, Any] = {"replicas": 1}
    if match_labels is not None:
        spec["selector"] = {"matchLabels": match_labels}
    return {"kind": kind, "metadata": metadata, "spec": spec}


RAW_OBJECTS: dict[str, list[dict[str, Any]]] = {
    "deployments": [
        _raw("Deployment", "web", {"app": "web"}, match_labels={"app": "web"}),
    ],
    "replicasets": [
        _raw(
            "ReplicaSet",
            "web-6f7c",
            {"app": "web"},
            owner=("Deployment", "web"),
            match_labels={"app": "web"},
        ),
        _raw("ReplicaSet", "api-5d8f", {"app": "api"}, match_labels={"app": "api"}),
    ],
    "pods": [
        _raw("Pod", "web-6f7c-x1", {"app": "web"}, owner=("ReplicaSet", "web-6f7c")),
        _raw("Pod", "api-5d8f-y1", {"app": "api"}, owner=("ReplicaSet", "api-5d8f")),
    ],
    "statefulsets": [],
    "daemonsets": [],
}


def _list(
    gvr: GVR,
    namespace: str | None = None,
    *,
    all_namespaces: bool = False,
    label_selector: str | None = None,
) -> list[dict[str, Any]]:
    return [
        raw
        for raw in RAW_OBJECTS[gvr.resource]
        if (all_namespaces or raw["metadata"]["namespace"] == namespace)
        and matches_selector(raw["metadata"]["labels"], label_selector)
    ]


def _get(
    gvr: GVR,
    path: str,
    *,
    strict: bool = True,
    label_selector: str | None = None,
) -> dict[str, Any]:
    namespace, name = split_path(path)
    for raw in RAW_OBJECTS[gvr.resource]:
        if raw["metadata"]["name"] == name and raw["metadata"]["namespace"] == namespace:
            return raw
    raise KubernetesNotFoundError(
        resource_type=gvr.resource, resource_name=name, namespace=namespace
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock KubernetesClient."""
    client = MagicMock()
    client.default_namespace = "prod"
    return client


@pytest.fixture
def resources() -> Iterator[MagicMock]:
    """Patch the ResourceManager the app builds."""
    with patch("kube_console.tui.apps.kubernetes.app.ResourceManager") as manager_cls:
        manager = manager_cls.return_value
        manager.list.side_effect = _list
        manager.get.side_effect = _get
        yield manager


@pytest.fixture
def workloads() -> Iterator[MagicMock]:
    """Patch the WorkloadManager the app builds."""
    with patch("kube_console.tui.apps.kubernetes.app.WorkloadManager") as manager_cls:
        manager = manager_cls.return_value
        manager.rollback_replica_set.return_value = True
        yield manager
