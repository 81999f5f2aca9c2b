"""Kubernetes API access for the console.

``KubernetesClient`` owns the loaded kubeconfig and hands out API objects
built against it. Typed ``apps/v1`` calls are used for workload mutations;
everything the browser lists goes through the dynamic client.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from kube_console.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiException, AppsV1Api, VersionApi
    from kubernetes.dynamic import DynamicClient

    from kube_console.integrations.kubernetes.config import KubernetesConsoleConfig

logger = structlog.get_logger()


class KubeContext(BaseModel):
    """One context entry of a kubeconfig file."""

    name: str
    cluster: str = ""
    namespace: str = "default"
    active: bool = False


def _status_details(error: ApiException) -> tuple[str | None, list[dict[str, Any]]]:
    """Pull ``message`` and ``details.causes`` out of an API Status body."""
    try:
        body = json.loads(error.body) if error.body else {}
    except (TypeError, ValueError):
        return None, []
    if not isinstance(body, dict):
        return None, []
    causes = (body.get("details") or {}).get("causes") or []
    return body.get("message"), causes


class KubernetesClient:
    """Connection to one cluster, selected by kubeconfig context.

    API objects are created on first use and dropped whenever the context
    changes, so they always talk to the cluster currently loaded.

    Example:
        ```python
        with KubernetesClient(KubernetesConsoleConfig.from_file()) as client:
            client.check_connection()
            rs = client.apps_v1.read_namespaced_replica_set("web-5d8f", "default")
        ```
    """

    def __init__(self, console_config: KubernetesConsoleConfig) -> None:
        self._config = console_config
        self._retries = console_config.defaults.retry_attempts
        self._current_context: str | None = None
        self._apis: dict[str, Any] = {}

        self._load_config()
        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            default_namespace=console_config.get_active_namespace(),
        )

    def _load_config(self) -> None:
        """Load the configured kubeconfig, falling back to in-cluster credentials."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        context = self._config.get_active_context()
        kubeconfig = self._config.get_active_kubeconfig()
        try:
            config.load_kube_config(config_file=kubeconfig, context=context)
            self._current_context = context or self._kubeconfig_current_context()
            logger.debug("loaded_kubeconfig", context=self._current_context, kubeconfig=kubeconfig)
        except ConfigException as e:
            try:
                config.load_incluster_config()
            except ConfigException as incluster_error:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=incluster_error,
                ) from e
            self._current_context = "in-cluster"
            logger.debug("loaded_incluster_config")
        self._apis.clear()

    def _read_kubeconfig_contexts(self) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
        from kubernetes import config

        return config.list_kube_config_contexts(config_file=self._config.get_active_kubeconfig())

    def _kubeconfig_current_context(self) -> str | None:
        try:
            _, active = self._read_kubeconfig_contexts()
        except Exception:
            return None
        return active.get("name") if active else None

    def _api(self, key: str, factory: Callable[[], Any]) -> Any:
        if key not in self._apis:
            self._apis[key] = factory()
        return self._apis[key]

    # =========================================================================
    # API objects
    # =========================================================================

    @property
    def apps_v1(self) -> AppsV1Api:
        """Typed ``apps/v1`` API for Deployment and ReplicaSet reads and patches."""
        from kubernetes.client import AppsV1Api

        return self._api("apps_v1", AppsV1Api)

    @property
    def version_api(self) -> VersionApi:
        from kubernetes.client import VersionApi

        return self._api("version", VersionApi)

    @property
    def dynamic(self) -> DynamicClient:
        """Dynamic client addressing any kind by group/version/resource."""
        from kubernetes.client import ApiClient
        from kubernetes.dynamic import DynamicClient

        return self._api("dynamic", lambda: DynamicClient(ApiClient()))

    # =========================================================================
    # Contexts
    # =========================================================================

    def get_current_context(self) -> str:
        return self._current_context or "unknown"

    def list_contexts(self) -> list[KubeContext]:
        """Contexts of the active kubeconfig; empty when it cannot be read."""
        try:
            contexts, active = self._read_kubeconfig_contexts()
        except Exception as e:
            logger.debug("kubeconfig_contexts_unreadable", error=str(e))
            return []

        active_name = active.get("name") if active else None
        return [
            KubeContext(
                name=entry.get("name", ""),
                active=entry.get("name") == active_name,
                **{
                    field: value
                    for field, value in (entry.get("context") or {}).items()
                    if field in ("cluster", "namespace")
                },
            )
            for entry in contexts
        ]

    def switch_context(self, context_name: str) -> None:
        """Reload credentials for another context.

        ``context_name`` may name a cluster from the console config, in which
        case its context and kubeconfig are used.

        Raises:
            KubernetesConnectionError: If the context cannot be loaded.
        """
        from kubernetes import config
        from kubernetes.config import ConfigException

        kubeconfig = None
        if cluster := self._config.clusters.get(context_name):
            context_name, kubeconfig = cluster.context, cluster.kubeconfig

        try:
            config.load_kube_config(config_file=kubeconfig, context=context_name)
        except ConfigException as e:
            raise KubernetesConnectionError(
                message=f"Failed to switch to context '{context_name}'",
                original_error=e,
            ) from e
        self._current_context = context_name
        self._apis.clear()
        logger.info("switched_context", context=context_name)

    # =========================================================================
    # Error translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Map any exception from an API call onto the console's error types.

        The API server's Status message is preferred over the bare HTTP
        reason when the response carries one.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e
        if isinstance(e, TimeoutError):
            return KubernetesTimeoutError(message=str(e) or "Kubernetes request timed out")
        if not isinstance(e, ApiException):
            return KubernetesError(
                str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status
        detail, causes = _status_details(e)
        message = detail or e.reason

        target = {
            "resource_type": resource_type,
            "resource_name": resource_name,
            "namespace": namespace,
        }
        if status in (401, 403):
            return KubernetesAuthError(
                message=message or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )
        if status == 404:
            return KubernetesNotFoundError(**target)
        if status == 409:
            return KubernetesConflictError(**target)
        if status in (408, 504):
            return KubernetesTimeoutError(message=message or "Kubernetes request timed out")
        if status in (400, 422):
            return KubernetesValidationError(
                message=message or "Validation failed", status_code=status, causes=causes
            )
        return KubernetesError(
            message or f"Kubernetes API error: {status}", status_code=status, **target
        )

    # =========================================================================
    # Connection check
    # =========================================================================

    def make_retry_decorator(self) -> Any:
        """Tenacity decorator retrying connection errors with exponential backoff."""
        return retry(
            retry=retry_if_exception_type(KubernetesConnectionError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    def get_cluster_version(self) -> str:
        try:
            info = self.version_api.get_code()
        except Exception as e:
            raise KubernetesConnectionError(
                message="Failed to get cluster version", original_error=e
            ) from e
        return f"v{info.major}.{info.minor}"

    def check_connection(self) -> str:
        """Return the cluster version, retrying while the server is unreachable.

        Raises:
            KubernetesConnectionError: If every attempt fails.
        """
        return self.make_retry_decorator()(self.get_cluster_version)()

    @property
    def default_namespace(self) -> str:
        return self._config.get_active_namespace()

    @property
    def timeout(self) -> int:
        """Per-request timeout in seconds."""
        return self._config.get_active_timeout()

    def close(self) -> None:
        self._apis.clear()
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
