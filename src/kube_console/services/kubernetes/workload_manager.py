"""Kubernetes workload mutations.

Workload-specific actions the console offers on top of generic
get/list/delete: rolling a Deployment back to the revision held by one of its
ReplicaSets, and restarting a Deployment.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any

from kube_console.integrations.kubernetes.exceptions import KubernetesRollbackError
from kube_console.services.kubernetes.base import K8sBaseManager

REVISION_ANNOTATION = "deployment.kubernetes.io/revision"
POD_TEMPLATE_HASH_LABEL = "pod-template-hash"
RESTARTED_AT_ANNOTATION = "kubectl.kubernetes.io/restartedAt"

# Deployment annotations that are owned by the controller, never copied from a ReplicaSet
ROLLBACK_SKIPPED_ANNOTATIONS = frozenset(
    {
        "kubectl.kubernetes.io/last-applied-configuration",
        REVISION_ANNOTATION,
        "deployment.kubernetes.io/revision-history",
        "deployment.kubernetes.io/desired-replicas",
        "deployment.kubernetes.io/max-replicas",
        "deprecated.deployment.rollback.to",
    }
)


def _revision_of(rs: Any) -> int:
    """Read the revision annotation of a ReplicaSet.

    Raises:
        KubernetesRollbackError: If the annotation is missing or not a number.
    """
    annotations = getattr(rs.metadata, "annotations", None) or {}
    raw = annotations.get(REVISION_ANNOTATION)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise KubernetesRollbackError(
            f"ReplicaSet has no usable '{REVISION_ANNOTATION}' annotation",
            resource_type="ReplicaSet",
            resource_name=rs.metadata.name,
            namespace=rs.metadata.namespace,
        ) from None


class WorkloadManager(K8sBaseManager):
    """Manager for workload mutations: rollback and restart."""

    _entity_name = "workload"

    def rollback_replica_set(self, path: str) -> bool:
        """Roll the owning Deployment back to the revision held by a ReplicaSet.

        Mirrors ``kubectl rollout undo --to-revision``: the ReplicaSet's pod
        template (without its ``pod-template-hash`` label) and annotations are
        patched onto the Deployment.

        Args:
            path: ``namespace/name`` of the ReplicaSet.

        Returns:
            False if the Deployment already runs that template, True otherwise.

        Raises:
            KubernetesRollbackError: If the ReplicaSet has no Deployment owner,
                no revision, or the Deployment is paused.
            KubernetesError: If an API call fails.
        """
        ns, name = self._resolve_path(path)
        self._log.info("rolling_back_replicaset", name=name, namespace=ns)
        try:
            rs = self._client.apps_v1.read_namespaced_replica_set(
                name=name, namespace=ns, **self._request_options
            )
        except Exception as e:
            self._handle_api_error(e, "ReplicaSet", name, ns)

        owners = getattr(rs.metadata, "owner_references", None) or []
        owner = next((o for o in owners if getattr(o, "kind", "") == "Deployment"), None)
        if owner is None:
            raise KubernetesRollbackError(
                "no Deployment owner reference found",
                resource_type="ReplicaSet",
                resource_name=name,
                namespace=ns,
            )
        revision = _revision_of(rs)

        try:
            deployment = self._client.apps_v1.read_namespaced_deployment(
                name=owner.name, namespace=ns, **self._request_options
            )
        except Exception as e:
            self._handle_api_error(e, "Deployment", owner.name, ns)

        if getattr(deployment.spec, "paused", False):
            raise KubernetesRollbackError(
                "cannot roll back a paused deployment, resume it first",
                resource_type="Deployment",
                resource_name=owner.name,
                namespace=ns,
            )

        template = copy.deepcopy(rs.spec.template)
        labels = getattr(template.metadata, "labels", None)
        if labels:
            labels.pop(POD_TEMPLATE_HASH_LABEL, None)

        if template == deployment.spec.template:
            self._log.info(
                "rollback_skipped",
                deployment=owner.name,
                namespace=ns,
                revision=revision,
            )
            return False

        annotations = {
            k: v
            for k, v in (deployment.metadata.annotations or {}).items()
            if k in ROLLBACK_SKIPPED_ANNOTATIONS
        }
        annotations.update(
            {
                k: v
                for k, v in (rs.metadata.annotations or {}).items()
                if k not in ROLLBACK_SKIPPED_ANNOTATIONS
            }
        )
        patch = [
            {"op": "replace", "path": "/spec/template", "value": template},
            {"op": "replace", "path": "/metadata/annotations", "value": annotations},
        ]
        try:
            self._client.apps_v1.patch_namespaced_deployment(
                name=owner.name,
                namespace=ns,
                body=patch,
                **self._request_options,
            )
        except Exception as e:
            self._handle_api_error(e, "Deployment", owner.name, ns)

        self._log.info(
            "rolled_back_deployment",
            deployment=owner.name,
            namespace=ns,
            to_revision=revision,
        )
        return True

    def restart_deployment(self, path: str) -> None:
        """Restart a deployment by patching the pod template annotation.

        Equivalent to ``kubectl rollout restart deployment``.

        Args:
            path: ``namespace/name`` of the Deployment.
        """
        ns, name = self._resolve_path(path)
        self._log.info("restarting_deployment", name=name, namespace=ns)
        try:
            now = datetime.now(UTC).isoformat()
            patch = {
                "spec": {"template": {"metadata": {"annotations": {RESTARTED_AT_ANNOTATION: now}}}}
            }
            self._client.apps_v1.patch_namespaced_deployment(
                name=name, namespace=ns, body=patch, **self._request_options
            )
            self._log.info("restarted_deployment", name=name, namespace=ns)
        except Exception as e:
            self._handle_api_error(e, "Deployment", name, ns)
