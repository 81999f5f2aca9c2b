"""Deployment viewer extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_console.tui.viewer import KeyAction, KeyActions
from kube_console.tui.viewer.kinds import BindKeysHook

if TYPE_CHECKING:
    from kube_console.services.kubernetes import WorkloadManager
    from kube_console.tui.viewer import ResourceViewer


def deployment_bind_keys(workloads: WorkloadManager) -> BindKeysHook:
    """Restart on ``ctrl+r``: a rolling restart via the restartedAt annotation."""

    def bind_keys(viewer: ResourceViewer, actions: KeyActions) -> None:
        actions.add(
            {
                "ctrl+r": KeyAction(
                    "Restart",
                    viewer.command(
                        verb="Restart",
                        progress="Restarting",
                        done="restarted",
                        mutate=workloads.restart_deployment,
                    ),
                ),
            }
        )

    return bind_keys


def show_replica_sets(viewer: ResourceViewer, path: str) -> None:
    """Open the ReplicaSets selected by the Deployment at ``path``."""
    viewer.selector_resolver("ReplicaSet").show(path)
