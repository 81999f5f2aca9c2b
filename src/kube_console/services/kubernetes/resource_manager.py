"""Kind-agnostic access to Kubernetes resources.

Reads go through the dynamic client so any group/version/resource can be
fetched without kind-specific code; the console decodes the returned raw
objects itself.
"""

from __future__ import annotations

from typing import Any

from kube_console.integrations.kubernetes.exceptions import KubernetesNotFoundError
from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.integrations.kubernetes.models.base import split_path
from kube_console.services.kubernetes.base import K8sBaseManager


def matches_selector(labels: dict[str, str] | None, selector: str | None) -> bool:
    """Check labels against an equality-based label selector.

    Supports ``key=value``, ``key==value``, ``key!=value``, ``key`` and
    ``!key`` terms joined by commas. An empty selector matches everything.

    Raises:
        ValueError: If a term uses set-based syntax.
    """
    if not selector:
        return True
    labels = labels or {}
    for raw_term in selector.split(","):
        term = raw_term.strip()
        if not term:
            continue
        if " in " in term or " notin " in term or "(" in term:
            raise ValueError(f"set-based selector terms are not supported: '{term}'")
        if "!=" in term:
            key, value = (part.strip() for part in term.split("!=", 1))
            if labels.get(key) == value:
                return False
        elif "=" in term:
            key, value = (part.strip() for part in term.replace("==", "=").split("=", 1))
            if labels.get(key) != value:
                return False
        elif term.startswith("!"):
            if term[1:].strip() in labels:
                return False
        elif term not in labels:
            return False
    return True


def selector_from_labels(match_labels: dict[str, str] | None) -> str:
    """Render a matchLabels mapping as a selector string."""
    return ",".join(f"{k}={v}" for k, v in sorted((match_labels or {}).items()))


class ResourceManager(K8sBaseManager):
    """Generic get/list/delete over any group/version/resource."""

    _entity_name = "resource"

    def _resource_api(self, gvr: GVR) -> Any:
        """Look up the dynamic API for a GVR."""
        return self._client.dynamic.resources.get(api_version=gvr.api_version, name=gvr.resource)

    def get(
        self,
        gvr: GVR | str,
        path: str,
        *,
        strict: bool = True,
        label_selector: str | None = None,
    ) -> dict[str, Any] | None:
        """Fetch a single resource as a raw mapping.

        Args:
            gvr: Group/version/resource of the kind.
            path: ``namespace/name`` (or ``name`` for cluster-scoped kinds).
            strict: Raise when the resource does not exist. When False a
                missing resource yields None.
            label_selector: The resource only counts as found when its
                labels match this selector.

        Returns:
            The raw object, or None when missing and not strict.

        Raises:
            KubernetesNotFoundError: If missing (or filtered out) and strict.
            KubernetesError: For any other API failure.
        """
        gvr = GVR.parse(gvr) if isinstance(gvr, str) else gvr
        namespace, name = split_path(path)
        self._log.debug("getting_resource", gvr=str(gvr), name=name, namespace=namespace)
        try:
            api = self._resource_api(gvr)
            kwargs: dict[str, Any] = {"name": name, **self._request_options}
            if api.namespaced:
                namespace = self._resolve_namespace(namespace)
                kwargs["namespace"] = namespace
            raw = api.get(**kwargs).to_dict()
        except Exception as e:
            error = self._client.translate_api_exception(e, gvr.resource, name, namespace)
            if isinstance(error, KubernetesNotFoundError) and not strict:
                return None
            raise error from e

        labels = (raw.get("metadata") or {}).get("labels")
        if not matches_selector(labels, label_selector):
            if not strict:
                return None
            raise KubernetesNotFoundError(
                resource_type=gvr.resource, resource_name=name, namespace=namespace
            )
        return raw

    def list(
        self,
        gvr: GVR | str,
        namespace: str | None = None,
        *,
        all_namespaces: bool = False,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List resources of a kind as raw mappings.

        Args:
            gvr: Group/version/resource of the kind.
            namespace: Target namespace (ignored for cluster-scoped kinds).
            all_namespaces: List across all namespaces.
            label_selector: Filter by label selector.
        """
        gvr = GVR.parse(gvr) if isinstance(gvr, str) else gvr
        self._log.debug("listing_resources", gvr=str(gvr), namespace=namespace)
        try:
            api = self._resource_api(gvr)
            kwargs: dict[str, Any] = self._request_options
            if label_selector:
                kwargs["label_selector"] = label_selector
            if api.namespaced and not all_namespaces:
                kwargs["namespace"] = self._resolve_namespace(namespace)
            result = api.get(**kwargs).to_dict()
        except Exception as e:
            self._handle_api_error(e, gvr.resource, None, namespace)

        items: list[dict[str, Any]] = result.get("items") or []
        self._log.debug("listed_resources", gvr=str(gvr), count=len(items))
        return items

    def delete(self, gvr: GVR | str, path: str) -> None:
        """Delete a resource.

        Args:
            gvr: Group/version/resource of the kind.
            path: ``namespace/name`` (or ``name`` for cluster-scoped kinds).
        """
        gvr = GVR.parse(gvr) if isinstance(gvr, str) else gvr
        namespace, name = split_path(path)
        self._log.info("deleting_resource", gvr=str(gvr), name=name, namespace=namespace)
        try:
            api = self._resource_api(gvr)
            kwargs: dict[str, Any] = {"name": name, **self._request_options}
            if api.namespaced:
                namespace = self._resolve_namespace(namespace)
                kwargs["namespace"] = namespace
            api.delete(**kwargs)
            self._log.info("deleted_resource", gvr=str(gvr), name=name, namespace=namespace)
        except Exception as e:
            self._handle_api_error(e, gvr.resource, name, namespace)
