"""ReplicaSet viewer extensions.

Adds owner navigation to the Deployment, hidden sort keys on the replica
count columns and rollback of the owning Deployment to the selected
ReplicaSet's revision.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_console.tui.viewer import KeyAction, KeyActions
from kube_console.tui.viewer.kinds import BindKeysHook

if TYPE_CHECKING:
    from kube_console.services.kubernetes import WorkloadManager
    from kube_console.tui.viewer import ResourceViewer


def rollback_message(path: str, rolled_back: bool) -> str:
    if rolled_back:
        return f"{path} successfully rolled back"
    return f"{path} already matches the Deployment template, nothing to roll back"


def replica_set_bind_keys(workloads: WorkloadManager) -> BindKeysHook:
    """Build the ReplicaSet key hook around a workload manager."""

    def bind_keys(viewer: ResourceViewer, actions: KeyActions) -> None:
        selection = viewer.selection
        actions.add(
            {
                "o": KeyAction("Show Deployment", viewer.owner_resolver(("Deployment",))),
                "D": KeyAction(
                    "Sort Desired", selection.sort_column_cmd("Desired", True), visible=False
                ),
                "C": KeyAction(
                    "Sort Current", selection.sort_column_cmd("Current", True), visible=False
                ),
                "R": KeyAction(
                    "Sort Ready", selection.sort_column_cmd("Ready", True), visible=False
                ),
                "ctrl+l": KeyAction(
                    "Rollback",
                    viewer.command(
                        verb="Rollback",
                        progress="Rolling back",
                        done="rolled back",
                        mutate=workloads.rollback_replica_set,
                        success_message=rollback_message,
                    ),
                ),
            }
        )

    return bind_keys
