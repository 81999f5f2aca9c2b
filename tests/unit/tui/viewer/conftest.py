"""Shared fixtures for viewer core tests.

The host is a MagicMock whose ``run_remote`` runs the call inline and
delivers the outcome immediately, standing in for the worker thread.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.integrations.kubernetes.models import ResourceObject, decode_resource
from kube_console.tui.viewer.confirm import ConfirmationWorkflow
from kube_console.tui.viewer.kinds import KindRegistry, ResourceKind


def run_inline(
    call: Callable[[], Any],
    on_success: Callable[[Any], None],
    on_error: Callable[[Exception], None],
) -> None:
    try:
        result = call()
    except Exception as e:
        on_error(e)
        return
    on_success(result)


class FakeSelection:
    """Selection with a settable identity that counts refreshes."""

    def __init__(self, identity: str = "") -> None:
        self.identity = identity
        self.refresh_count = 0

    def current_identity(self) -> str:
        return self.identity

    def refresh(self) -> None:
        self.refresh_count += 1


def _make_object(
    kind: str,
    name: str,
    namespace: str = "prod",
    owners: list[dict[str, str]] | None = None,
    spec: dict[str, Any] | None = None,
) -> ResourceObject:
    return decode_resource(
        {
            "kind": kind,
            "metadata": {
                "name": name,
                "namespace": namespace,
                "ownerReferences": owners or [],
            },
            "spec": spec or {},
        }
    )


def _row(obj: ResourceObject) -> tuple[str, ...]:
    return (obj.name,)


@pytest.fixture
def make_object() -> Callable[..., ResourceObject]:
    """Factory for decoded objects with optional owner references and spec."""
    return _make_object


@pytest.fixture
def host() -> MagicMock:
    host = MagicMock()
    host.run_remote.side_effect = run_inline
    return host


@pytest.fixture
def selection() -> FakeSelection:
    return FakeSelection("prod/web-6f7c")


@pytest.fixture
def confirmation(host: MagicMock) -> ConfirmationWorkflow:
    return ConfirmationWorkflow(host)


@pytest.fixture
def kinds() -> KindRegistry:
    return KindRegistry(
        [
            ResourceKind("Pod", GVR.parse("v1/pods"), (("Name", 30),), _row),
            ResourceKind("ReplicaSet", GVR.parse("apps/v1/replicasets"), (("Name", 30),), _row),
            ResourceKind("Deployment", GVR.parse("apps/v1/deployments"), (("Name", 30),), _row),
        ]
    )
