"""Catalogue of workload kinds the console can browse."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.tui.apps.kubernetes.columns import (
    DAEMONSET_COLUMNS,
    DEPLOYMENT_COLUMNS,
    POD_COLUMNS,
    REPLICASET_COLUMNS,
    STATEFULSET_COLUMNS,
    daemon_set_row,
    deployment_row,
    pod_row,
    replica_set_row,
    stateful_set_row,
)
from kube_console.tui.apps.kubernetes.deployment import deployment_bind_keys, show_replica_sets
from kube_console.tui.apps.kubernetes.pod import POD_OWNER_KINDS, pod_bind_keys, show_pods
from kube_console.tui.apps.kubernetes.replicaset import replica_set_bind_keys
from kube_console.tui.viewer.kinds import KindRegistry, ResourceKind

if TYPE_CHECKING:
    from kube_console.services.kubernetes import WorkloadManager

PODS = GVR.parse("v1/pods")
DEPLOYMENTS = GVR.parse("apps/v1/deployments")
REPLICASETS = GVR.parse("apps/v1/replicasets")
STATEFULSETS = GVR.parse("apps/v1/statefulsets")
DAEMONSETS = GVR.parse("apps/v1/daemonsets")


def build_kind_registry(workloads: WorkloadManager) -> KindRegistry:
    """Register every browsable kind, wiring mutations to ``workloads``."""
    return KindRegistry(
        [
            ResourceKind(
                kind="Pod",
                gvr=PODS,
                columns=POD_COLUMNS,
                row=pod_row,
                owner_kinds=POD_OWNER_KINDS,
                aliases=("po",),
                bind_keys=pod_bind_keys,
            ),
            ResourceKind(
                kind="Deployment",
                gvr=DEPLOYMENTS,
                columns=DEPLOYMENT_COLUMNS,
                row=deployment_row,
                aliases=("deploy", "dp"),
                bind_keys=deployment_bind_keys(workloads),
                on_enter=show_replica_sets,
            ),
            ResourceKind(
                kind="ReplicaSet",
                gvr=REPLICASETS,
                columns=REPLICASET_COLUMNS,
                row=replica_set_row,
                owner_kinds=("Deployment",),
                aliases=("rs",),
                bind_keys=replica_set_bind_keys(workloads),
                on_enter=show_pods,
            ),
            ResourceKind(
                kind="StatefulSet",
                gvr=STATEFULSETS,
                columns=STATEFULSET_COLUMNS,
                row=stateful_set_row,
                aliases=("sts",),
                on_enter=show_pods,
            ),
            ResourceKind(
                kind="DaemonSet",
                gvr=DAEMONSETS,
                columns=DAEMONSET_COLUMNS,
                row=daemon_set_row,
                aliases=("ds",),
                on_enter=show_pods,
            ),
        ]
    )
