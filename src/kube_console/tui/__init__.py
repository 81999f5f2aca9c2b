"""Terminal user interface for kube-console, built with Textual.

Usage:
    from kube_console.tui.apps.kubernetes import KubernetesApp
    from kube_console.tui.viewer import KeyActions, ResourceKind, ResourceViewer
"""

from kube_console.tui.base import BaseScreen

__all__ = ["BaseScreen"]
