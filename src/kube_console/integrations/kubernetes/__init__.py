"""Kubernetes integration - API client, configuration and models."""

from kube_console.integrations.kubernetes.client import KubeContext, KubernetesClient
from kube_console.integrations.kubernetes.config import (
    ClusterConfig,
    ConsoleUIConfig,
    KubernetesConsoleConfig,
    KubernetesDefaultsConfig,
)
from kube_console.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesDecodeError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesObjectError,
    KubernetesRollbackError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)
from kube_console.integrations.kubernetes.gvr import GVR

__all__ = [
    "GVR",
    "ClusterConfig",
    "ConsoleUIConfig",
    "KubeContext",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConflictError",
    "KubernetesConnectionError",
    "KubernetesConsoleConfig",
    "KubernetesDecodeError",
    "KubernetesDefaultsConfig",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesObjectError",
    "KubernetesRollbackError",
    "KubernetesTimeoutError",
    "KubernetesValidationError",
]
