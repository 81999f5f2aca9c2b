"""Pod viewer extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_console.tui.viewer import KeyAction, KeyActions

if TYPE_CHECKING:
    from kube_console.tui.viewer import ResourceViewer

POD_OWNER_KINDS = ("ReplicaSet", "StatefulSet", "DaemonSet")


def pod_bind_keys(viewer: ResourceViewer, actions: KeyActions) -> None:
    actions.add({"o": KeyAction("Show Owner", viewer.owner_resolver())})


def show_pods(viewer: ResourceViewer, path: str) -> None:
    """Open the Pods selected by the controller at ``path``."""
    viewer.selector_resolver("Pod").show(path)
