"""Kubernetes resource managers used by the console."""

from kube_console.services.kubernetes.resource_manager import ResourceManager, matches_selector
from kube_console.services.kubernetes.workload_manager import WorkloadManager

__all__ = [
    "ResourceManager",
    "WorkloadManager",
    "matches_selector",
]
