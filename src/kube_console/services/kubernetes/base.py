"""Common ground for the managers that talk to the API server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

import structlog

from kube_console.integrations.kubernetes.models.base import split_path

if TYPE_CHECKING:
    from kube_console.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()


class K8sBaseManager:
    """Holds the client and the helpers every manager call goes through.

    ``_entity_name`` is bound into each manager's log records as ``entity``.
    """

    _entity_name: str = ""

    def __init__(self, client: KubernetesClient) -> None:
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @property
    def _request_options(self) -> dict[str, Any]:
        """Keyword arguments added to every API call."""
        return {"_request_timeout": self._client.timeout}

    def _resolve_namespace(self, namespace: str | None) -> str:
        return namespace or self._client.default_namespace

    def _resolve_path(self, path: str) -> tuple[str, str]:
        """``namespace/name`` to ``(namespace, name)``, defaulting the namespace."""
        namespace, name = split_path(path)
        return self._resolve_namespace(namespace), name

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Re-raise ``e`` as the matching ``KubernetesError``."""
        error = self._client.translate_api_exception(e, resource_type, resource_name, namespace)
        self._log.debug("api_call_failed", error=str(error), status=error.status_code)
        if error is e:
            raise error
        raise error from e
