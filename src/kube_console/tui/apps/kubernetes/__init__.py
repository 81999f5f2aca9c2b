"""Kubernetes workload browser."""

from kube_console.tui.apps.kubernetes.app import KubernetesApp
from kube_console.tui.apps.kubernetes.kinds import build_kind_registry

__all__ = ["KubernetesApp", "build_kind_registry"]
